"""Task execution engine internals."""
