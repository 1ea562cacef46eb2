"""Task node execution."""
