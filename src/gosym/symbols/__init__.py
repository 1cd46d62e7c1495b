"""Symbol kinds, traversal, line model and scanning."""
