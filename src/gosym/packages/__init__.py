"""Package discovery, loading and caching."""
