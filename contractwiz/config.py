"""Arc Contract Wizard configuration.

Centralised, typed settings for the generator, the gas estimator, the README
renderer, and the HTTP collaborators.  All settings use Pydantic v2 models so
they can be validated at construction time and serialised to/from JSON or
environment variables without boiler-plate.

The network constants (chain id, RPC URL, USDC address, trusted forwarder)
live here and only here.  Every component receives them from a ``Config``
instance so the generated source, the gas estimate, and the README always
agree byte-for-byte.
"""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class NetworkConfig(BaseModel):
    """Well-known constants of the target network.

    Arc uses USDC as its native gas currency, so the stablecoin address is
    also the address of the chain's fee token.
    """

    name: str = Field(default="Arc Testnet")
    chain_id: int = Field(default=5042002, ge=1)
    chain_id_hex: str = Field(default="0x4cef52")
    rpc_url: str = Field(default="https://rpc.testnet.arc.network")
    explorer_url: str = Field(default="https://testnet.arcscan.app")
    usdc_address: str = Field(default="0x3600000000000000000000000000000000000000")
    usdc_decimals: int = Field(default=6, ge=0, le=18)
    trusted_forwarder: str = Field(
        default="0x71bE63fcc4540BE48f49BA3371Ca0670355f3068",
        description="ERC-2771 trusted forwarder used by Circle Wallets",
    )


class GasConfig(BaseModel):
    """Simplified gas model: fixed unit costs per family and per feature.

    These are configuration constants, not measured values.
    """

    price_per_unit_usdc: Decimal = Field(default=Decimal("0.00000002"), gt=0)
    base_costs: dict[str, int] = Field(
        default_factory=lambda: {
            "ERC721": 1_200_000,
            "ERC1155": 1_100_000,
            "ERC20": 800_000,
            "X420": 1_500_000,
        }
    )
    ownable: int = Field(default=50_000, ge=0)
    burnable: int = Field(default=80_000, ge=0)
    pausable: int = Field(default=100_000, ge=0)
    mintable: int = Field(default=120_000, ge=0)
    royalties: int = Field(default=150_000, ge=0)
    reveal: int = Field(default=100_000, ge=0)
    permit: int = Field(default=180_000, ge=0)
    gasless: int = Field(default=200_000, ge=0)
    payment: int = Field(default=80_000, ge=0)


class WalletServiceConfig(BaseModel):
    """Connection settings for the wallet-custody backend."""

    url: str = Field(default="http://localhost:54321/functions/v1/circle-wallet")
    api_key: str = Field(default="")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")


class Config(BaseModel):
    """Global Arc Contract Wizard configuration.

    Instances are typically created once by the CLI and passed to every
    component that needs network constants or gas costs.
    """

    output_dir: Path = Field(default=Path("./output"))
    solidity_pragma: str = Field(default=">=0.8.20 <0.9.0")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    gas: GasConfig = Field(default_factory=GasConfig)
    wallet_service: WalletServiceConfig = Field(default_factory=WalletServiceConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/wizard-config.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.output_dir / "wizard-config.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            ARCWIZ_OUTPUT_DIR, ARCWIZ_RPC_URL, ARCWIZ_CHAIN_ID,
            ARCWIZ_USDC_ADDRESS, ARCWIZ_TRUSTED_FORWARDER,
            ARCWIZ_WALLET_SERVICE_URL, ARCWIZ_WALLET_SERVICE_KEY,
            ARCWIZ_WALLET_TIMEOUT.
        """
        network_kwargs: dict[str, Any] = {}
        if os.environ.get("ARCWIZ_RPC_URL"):
            network_kwargs["rpc_url"] = os.environ["ARCWIZ_RPC_URL"]
        if os.environ.get("ARCWIZ_CHAIN_ID"):
            network_kwargs["chain_id"] = int(os.environ["ARCWIZ_CHAIN_ID"])
            network_kwargs["chain_id_hex"] = hex(network_kwargs["chain_id"])
        if os.environ.get("ARCWIZ_USDC_ADDRESS"):
            network_kwargs["usdc_address"] = os.environ["ARCWIZ_USDC_ADDRESS"]
        if os.environ.get("ARCWIZ_TRUSTED_FORWARDER"):
            network_kwargs["trusted_forwarder"] = os.environ["ARCWIZ_TRUSTED_FORWARDER"]

        wallet_kwargs: dict[str, Any] = {}
        if os.environ.get("ARCWIZ_WALLET_SERVICE_URL"):
            wallet_kwargs["url"] = os.environ["ARCWIZ_WALLET_SERVICE_URL"]
        if os.environ.get("ARCWIZ_WALLET_SERVICE_KEY"):
            wallet_kwargs["api_key"] = os.environ["ARCWIZ_WALLET_SERVICE_KEY"]
        if os.environ.get("ARCWIZ_WALLET_TIMEOUT"):
            wallet_kwargs["timeout"] = int(os.environ["ARCWIZ_WALLET_TIMEOUT"])

        return cls(
            output_dir=Path(os.environ.get("ARCWIZ_OUTPUT_DIR", "./output")),
            network=NetworkConfig(**network_kwargs),
            wallet_service=WalletServiceConfig(**wallet_kwargs),
        )


DEFAULT_CONFIG = Config()
