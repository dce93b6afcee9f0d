"""Domain layer contracts."""
