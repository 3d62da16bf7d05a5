"""Application layer - configuration loading and adaptation."""
