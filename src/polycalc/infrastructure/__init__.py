"""Infrastructure layer -- input streams."""
