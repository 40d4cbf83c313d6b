"""Domain layer for the media catalog."""
