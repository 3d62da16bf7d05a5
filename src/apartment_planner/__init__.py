"""Floor-plan furniture layout with wall, opening and placement validation."""
