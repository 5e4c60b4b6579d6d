"""Pydantic v2 models for the contract configuration.

``ContractConfiguration`` is the only input to the generator, the gas
estimator, and the README renderer.  It is frozen: the wizard builds a new
instance for every render instead of mutating one in place.

Invalid numeric input never raises.  Each field degrades to a safe default
(see the ``_coerce_*`` validators) and :func:`collect_issues` reports every
substitution so callers can surface it as a warning.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ContractFamily(str, Enum):
    """Token standard selected in the wizard."""
    ERC721 = "ERC721"
    ERC1155 = "ERC1155"
    ERC20 = "ERC20"
    X420 = "X420"


class BaseUriMode(str, Enum):
    """How the ERC-721 metadata base URI is stored."""
    NONE = "none"
    FIXED = "fixed"
    MODIFIABLE = "modifiable"


class MintPolicy(str, Enum):
    """Who may call the public mint entrypoint."""
    ONLY_OWNER = "onlyOwner"
    PUBLIC = "public"
    PUBLIC_WITH_LIMIT = "publicWithLimit"


class MediaKind(str, Enum):
    """Declared content type of an X420 collection."""
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"
    MIXED = "mixed"


DEFAULT_DECIMALS = 18
DEFAULT_RECURSION_DEPTH = 3
MAX_RECURSION_DEPTH = 10
MAX_ROYALTY_BASIS_POINTS = 10_000
USDC_UNIT = 1_000_000


# ---------------------------------------------------------------------------
# Coercion helpers (degrade-to-default)
# ---------------------------------------------------------------------------

def _to_int(value: Any) -> Optional[int]:
    """Parse *value* as an integer, returning ``None`` when impossible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and re.fullmatch(r"\s*[+-]?\d+\s*", value):
        return int(value)
    return None


def _positive_or_none(value: Any) -> Optional[int]:
    parsed = _to_int(value)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def _in_range_or_default(value: Any, low: int, high: int, default: int) -> int:
    parsed = _to_int(value)
    if parsed is None or not low <= parsed <= high:
        return default
    return parsed


def _is_zero(value: str) -> bool:
    try:
        return Decimal(value) == 0
    except InvalidOperation:
        return False


def parse_usdc_amount(value: str) -> int:
    """Convert a decimal USDC string to 6-decimal integer units.

    ``"2"`` -> ``2000000``, ``"0.5"`` -> ``500000``.  Empty, unparsable, or
    negative input yields ``0``.
    """
    if not value or not str(value).strip():
        return 0
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return 0
    if not amount.is_finite() or amount < 0:
        return 0
    return int((amount * USDC_UNIT).quantize(Decimal(1), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------

class ContractConfiguration(BaseModel):
    """Everything the wizard knows about the contract to generate."""

    model_config = ConfigDict(frozen=True)

    family: ContractFamily = Field(default=ContractFamily.ERC721)
    name: str = Field(default="MyToken", description="Contract identifier, emitted verbatim")
    symbol: str = Field(default="MTK", description="Token ticker, emitted verbatim")

    # Base URI (ERC-721 modes; ERC-1155 and X420 use base_uri directly)
    base_uri_mode: BaseUriMode = Field(default=BaseUriMode.NONE)
    base_uri: str = Field(default="")

    # Core features
    mintable: bool = Field(default=True)
    burnable: bool = Field(default=False)
    pausable: bool = Field(default=False)
    ownable: bool = Field(default=True)

    # Mint options
    mint_policy: MintPolicy = Field(default=MintPolicy.ONLY_OWNER)
    max_per_wallet: Optional[int] = Field(default=None)
    paid_mint_enabled: bool = Field(default=False)
    mint_price: str = Field(default="", description="Decimal USDC price, e.g. '2.5'")
    max_supply: Optional[int] = Field(default=None)
    start_token_id: int = Field(default=1)

    # Reveal (ERC-721)
    reveal_enabled: bool = Field(default=False)
    hidden_uri: str = Field(default="")

    # Royalties ERC-2981 (ERC-721)
    royalties_enabled: bool = Field(default=False)
    royalty_receiver: str = Field(default="", description="Defaults to the deployer")
    royalty_basis_points: int = Field(default=500)

    # ERC-20
    decimals: int = Field(default=DEFAULT_DECIMALS)
    initial_supply: str = Field(default="", description="Whole tokens minted to the deployer")
    permit_enabled: bool = Field(default=False)

    # X420
    recursion_depth_limit: int = Field(default=DEFAULT_RECURSION_DEPTH)
    media_kind: MediaKind = Field(default=MediaKind.IMAGE)

    # Gas sponsorship
    meta_transactions_enabled: bool = Field(default=False)
    native_stablecoin_gas_enabled: bool = Field(default=False)
    sponsor_address: str = Field(default="")

    # -- Degrade-to-default validators -------------------------------------

    @field_validator("max_per_wallet", "max_supply", mode="before")
    @classmethod
    def _coerce_optional_positive(cls, value: Any) -> Optional[int]:
        return _positive_or_none(value)

    @field_validator("start_token_id", mode="before")
    @classmethod
    def _coerce_start_token_id(cls, value: Any) -> int:
        parsed = _to_int(value)
        return parsed if parsed in (0, 1) else 1

    @field_validator("royalty_basis_points", mode="before")
    @classmethod
    def _coerce_royalty(cls, value: Any) -> int:
        parsed = _to_int(value)
        if parsed is None:
            return 500
        return max(0, min(MAX_ROYALTY_BASIS_POINTS, parsed))

    @field_validator("decimals", mode="before")
    @classmethod
    def _coerce_decimals(cls, value: Any) -> int:
        return _in_range_or_default(value, 0, 18, DEFAULT_DECIMALS)

    @field_validator("recursion_depth_limit", mode="before")
    @classmethod
    def _coerce_depth(cls, value: Any) -> int:
        return _in_range_or_default(value, 1, MAX_RECURSION_DEPTH, DEFAULT_RECURSION_DEPTH)

    @field_validator("initial_supply", mode="before")
    @classmethod
    def _coerce_initial_supply(cls, value: Any) -> str:
        if value is None or isinstance(value, bool):
            return ""
        text = str(value).strip()
        return text if re.fullmatch(r"\d+", text) else ""

    @field_validator("mint_price", "base_uri", "hidden_uri", "royalty_receiver",
                     "sponsor_address", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    # -- Derived properties -------------------------------------------------

    @property
    def uses_meta_transaction_infra(self) -> bool:
        """True when either gas-sponsorship toggle is on."""
        return self.meta_transactions_enabled or self.native_stablecoin_gas_enabled

    @property
    def paid_mint_applies(self) -> bool:
        """Paid mint only has an effect on a non-owner mint of a non-fungible family."""
        return (
            self.paid_mint_enabled
            and self.mint_policy != MintPolicy.ONLY_OWNER
            and self.family != ContractFamily.ERC20
            and bool(self.mint_price)
        )

    @property
    def mint_entrypoint_emitted(self) -> bool:
        """ERC20 minting is owner-only, so it needs Ownable to exist at all."""
        return self.mintable and (self.family != ContractFamily.ERC20 or self.ownable)

    @property
    def collects_payment(self) -> bool:
        """A paid mint that is actually reachable: the USDC pull is emitted."""
        return self.paid_mint_applies and self.mintable

    @property
    def limit_applies(self) -> bool:
        return self.mint_policy == MintPolicy.PUBLIC_WITH_LIMIT and self.max_per_wallet is not None

    @property
    def mint_price_units(self) -> int:
        return parse_usdc_amount(self.mint_price)

    # -- Construction helpers ----------------------------------------------

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ContractConfiguration":
        """Build a configuration from a loose mapping.

        Accepts snake_case field names, camelCase variants of them, and the
        key names saved by the browser wizard (``type``, ``mintAccessMode``,
        ``enablePaidMint`` ...).  Unknown keys are ignored.
        """
        return cls(**normalise_keys(raw))


# ---------------------------------------------------------------------------
# Key normalisation
# ---------------------------------------------------------------------------

_WIZARD_KEYS: dict[str, str] = {
    "type": "family",
    "baseUriMode": "base_uri_mode",
    "baseUri": "base_uri",
    "mintAccessMode": "mint_policy",
    "enablePaidMint": "paid_mint_enabled",
    "mintPrice": "mint_price",
    "enableReveal": "reveal_enabled",
    "hiddenUri": "hidden_uri",
    "enableRoyalties": "royalties_enabled",
    "royaltyReceiver": "royalty_receiver",
    "royaltyPercent": "royalty_basis_points",
    "initialSupply": "initial_supply",
    "permit": "permit_enabled",
    "arcGasless": "meta_transactions_enabled",
    "recursionDepth": "recursion_depth_limit",
    "contentType": "media_kind",
    "nativeUsdcGas": "native_stablecoin_gas_enabled",
    "paymasterAddress": "sponsor_address",
}


def _snake(key: str) -> str:
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", key)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def normalise_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map wizard/camelCase keys onto ``ContractConfiguration`` field names."""
    fields = ContractConfiguration.model_fields
    result: dict[str, Any] = {}
    for key, value in raw.items():
        target = _WIZARD_KEYS.get(key) or _snake(key)
        if target in fields:
            result[target] = value
    return result


# ---------------------------------------------------------------------------
# Issue reporting
# ---------------------------------------------------------------------------

class ConfigurationIssue(BaseModel):
    """A degrade-to-default substitution or an ignored setting."""

    field: str = Field(..., description="Configuration field the issue concerns")
    message: str = Field(..., description="Human-readable explanation")
    substituted: Any = Field(default=None, description="Value used instead, if any")


def collect_issues(
    config: ContractConfiguration,
    raw: Mapping[str, Any] | None = None,
) -> list[ConfigurationIssue]:
    """List every silent substitution and ignored setting in *config*.

    When *raw* (the mapping *config* was built from) is given, numeric
    fields whose input was replaced by a default are reported as well.
    """
    issues: list[ConfigurationIssue] = []

    if raw is not None:
        given = normalise_keys(raw)
        for field_name in ("max_per_wallet", "max_supply", "start_token_id",
                           "royalty_basis_points", "decimals",
                           "recursion_depth_limit", "initial_supply"):
            if field_name not in given or given[field_name] in (None, ""):
                continue
            used = getattr(config, field_name)
            if field_name == "initial_supply":
                changed = str(given[field_name]).strip() != used
            else:
                parsed = _to_int(given[field_name])
                changed = parsed is None or parsed != used
            if changed:
                issues.append(ConfigurationIssue(
                    field=field_name,
                    message=f"Invalid value {given[field_name]!r}; using {used!r}",
                    substituted=used,
                ))

    if config.mint_policy == MintPolicy.PUBLIC_WITH_LIMIT and config.max_per_wallet is None:
        issues.append(ConfigurationIssue(
            field="max_per_wallet",
            message="publicWithLimit needs a positive max_per_wallet; no limit is enforced",
        ))

    if config.paid_mint_enabled:
        if config.family == ContractFamily.ERC20:
            issues.append(ConfigurationIssue(
                field="paid_mint_enabled",
                message="Paid mint is ignored for ERC20 contracts",
            ))
        elif config.mint_policy == MintPolicy.ONLY_OWNER:
            issues.append(ConfigurationIssue(
                field="paid_mint_enabled",
                message="Paid mint has no effect when only the owner can mint",
            ))
        elif not config.mint_price:
            issues.append(ConfigurationIssue(
                field="mint_price",
                message="Paid mint is enabled without a price; no payment is collected",
            ))
        elif config.mint_price_units == 0 and not _is_zero(config.mint_price):
            issues.append(ConfigurationIssue(
                field="mint_price",
                message=f"Unparsable mint price {config.mint_price!r}; using 0",
                substituted=0,
            ))

    if not config.name.strip() or not config.symbol.strip():
        issues.append(ConfigurationIssue(
            field="name" if not config.name.strip() else "symbol",
            message="Empty identifier; the generated source will not compile",
        ))

    return issues
