"""
Core utilities shared across the local data store.

This package hosts:
- configuration helpers (env vars, database URL, decoding/uniqueness flags)
- the error hierarchy raised by every layer
- the JSON codec used to turn typed values into record payloads
"""
