"""Trust score persistence."""
