"""Domain modules and shared building blocks."""
