"""Peer host for chatclient: accepts one client at a time and speaks the same protocol."""
