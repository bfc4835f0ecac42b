"""Data models for the backup tree layout."""
