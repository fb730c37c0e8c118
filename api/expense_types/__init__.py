"""Type catalog shared by expenses and service providers."""
