"""Code shared by the chat client and the peer host."""
