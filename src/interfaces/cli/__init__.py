"""votus CLI."""
