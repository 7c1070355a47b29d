"""Infrastructure layer: storage implementations and their exceptions."""
