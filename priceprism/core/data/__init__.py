"""Data layer: schema, providers and caching."""
