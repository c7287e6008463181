"""Floor-plan document loading."""
