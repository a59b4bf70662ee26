"""Skip-segment resolution pipeline."""
