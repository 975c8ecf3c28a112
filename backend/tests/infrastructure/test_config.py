"""Settings — environment parsing and normalization.

Tests:
    - postgresql:// URLs rewritten for asyncpg
    - trailing slash stripped from public_base_url
    - chain defaults point at a local node
"""

from portal.config import Settings


def test_postgres_url_converted(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/nft_identity")
    assert Settings().database_url == "postgresql+asyncpg://u:p@db:5432/nft_identity"


def test_public_base_url_trailing_slash(monkeypatch):
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://portal.uni.edu/")
    assert Settings().public_base_url == "https://portal.uni.edu"


def test_chain_defaults(monkeypatch):
    monkeypatch.delenv("CHAIN_RPC_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.chain_rpc_url == "http://127.0.0.1:7545"
    assert settings.chain_network_id is None
    assert settings.contracts_dir == "build/contracts"
