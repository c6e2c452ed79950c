"""Bootstrap data."""
