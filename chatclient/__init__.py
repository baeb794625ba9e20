"""Point-to-point chat client: username handshake, then alternating lines until someone types \\quit."""
