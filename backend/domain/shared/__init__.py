"""Building blocks shared across domains."""
