"""Strike sizing and execution."""
