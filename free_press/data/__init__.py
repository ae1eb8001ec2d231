"""Bundled seed catalog and curated discovery list."""
