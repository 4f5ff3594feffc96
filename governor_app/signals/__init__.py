"""External signal acquisition."""
