"""Service providers, always paired with their address."""
