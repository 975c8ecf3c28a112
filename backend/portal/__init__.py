"""University Ledger Portal — administrative API with on-chain NFT receipts.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
