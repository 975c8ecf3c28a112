"""Infrastructure Layer — database pool, blockchain client, logging, credentials.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external failures mapped to core/errors.py types
"""
