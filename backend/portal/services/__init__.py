"""Services Layer — handler classes behind the API routes.

Invariants:
    - Mutating handlers follow one shape: precondition read, contract call, DB write
    - Read-only views never touch the chain client
"""
