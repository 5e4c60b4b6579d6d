"""Shared pytest fixtures for the Arc Contract Wizard test suite.

Provides reusable fixtures for:
- Configuration factories for each contract family
- Default and custom wizard settings
- Helpers for slicing generated Solidity
- Mocked ``httpx.AsyncClient`` instances
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from contractwiz.config import Config, NetworkConfig
from contractwiz.models import ContractConfiguration, ContractFamily


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config() -> Callable[..., ContractConfiguration]:
    """Factory: ``make_config(family=..., **overrides)``."""

    def _make(family: ContractFamily | str = ContractFamily.ERC721, **overrides: Any) -> ContractConfiguration:
        return ContractConfiguration(family=ContractFamily(family), **overrides)

    return _make


@pytest.fixture
def full_erc721(make_config) -> ContractConfiguration:
    """ERC721 with every feature that touches a shared hook."""
    return make_config(
        name="Everything",
        symbol="ALL",
        burnable=True,
        pausable=True,
        royalties_enabled=True,
        reveal_enabled=True,
        base_uri_mode="modifiable",
        base_uri="ipfs://base/",
        hidden_uri="ipfs://hidden",
        mint_policy="publicWithLimit",
        max_per_wallet=2,
        paid_mint_enabled=True,
        mint_price="1.5",
        max_supply=500,
        meta_transactions_enabled=True,
    )


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> Config:
    return Config()


@pytest.fixture
def custom_settings(tmp_path: Path) -> Config:
    """Settings pointing at a different network, to prove constants are injected."""
    return Config(
        output_dir=tmp_path / "out",
        network=NetworkConfig(
            name="Arc Devnet",
            chain_id=777,
            chain_id_hex="0x309",
            rpc_url="https://rpc.devnet.example",
            usdc_address="0x1111111111111111111111111111111111111111",
            trusted_forwarder="0x2222222222222222222222222222222222222222",
        ),
    )


# ---------------------------------------------------------------------------
# Solidity helpers
# ---------------------------------------------------------------------------

def function_body(source: str, signature_prefix: str) -> str:
    """Return the text of the function whose declaration starts with *signature_prefix*.

    The slice runs from the declaration to the first line that is exactly
    ``    }`` (end of a top-level function in generated code).
    """
    start = source.index(signature_prefix)
    end = source.index("\n    }", start)
    return source[start:end]


@pytest.fixture
def body_of() -> Callable[[str, str], str]:
    return function_body


# ---------------------------------------------------------------------------
# HTTP mocks
# ---------------------------------------------------------------------------

def make_async_client(response: Any = None, side_effect: Exception | None = None) -> AsyncMock:
    """An ``httpx.AsyncClient`` stand-in usable as an async context manager."""
    client = AsyncMock()
    if side_effect is not None:
        client.post = AsyncMock(side_effect=side_effect)
    else:
        client.post = AsyncMock(return_value=response)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


def make_json_response(payload: Any) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def mock_async_client() -> Callable[..., AsyncMock]:
    return make_async_client


@pytest.fixture
def json_response() -> Callable[[Any], MagicMock]:
    return make_json_response
