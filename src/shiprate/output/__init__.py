"""Output layer: renders ServiceResult for the terminal or as JSON."""
