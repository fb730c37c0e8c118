"""Access control and password hashing."""
