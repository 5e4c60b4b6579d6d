"""Simplified gas estimate for deploying a generated contract.

Each enabled feature adds one fixed line to the breakdown, in a fixed order:

1. ``<family> Base Deployment``
2. Ownable
3. Burnable
4. Pausable
5. Mintable
6. ERC-2981 Royalties (ERC721 only)
7. Reveal System (ERC721 only)
8. Permit (EIP-2612) (ERC20 only)
9. ERC-2771 Gasless (Circle)
10. USDC Payment Logic (only when the contract actually collects payment)

The total is the sum of the lines; the USDC cost is the total times the
configured price per unit, rounded to four decimal places.  Costs are
configuration constants (see :class:`contractwiz.config.GasConfig`), not
measurements.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field

from contractwiz.config import DEFAULT_CONFIG, Config
from contractwiz.models import ContractConfiguration, ContractFamily


class GasLineItem(BaseModel):
    """One labelled cost in the breakdown."""

    item: str = Field(..., description="Feature label")
    gas: int = Field(..., ge=0, description="Gas units attributed to the feature")


class GasEstimate(BaseModel):
    """Result of :func:`estimate_gas_cost`."""

    estimated_gas: int = Field(default=0, ge=0)
    estimated_cost_usdc: str = Field(default="0.0000")
    breakdown: list[GasLineItem] = Field(default_factory=list)

    def as_rows(self) -> dict[str, str]:
        """Breakdown as ``{label: "1,200,000"}`` for table rendering."""
        return {line.item: f"{line.gas:,}" for line in self.breakdown}


def estimate_gas_cost(
    config: ContractConfiguration,
    settings: Config | None = None,
) -> GasEstimate:
    """Estimate deployment gas and USDC cost for *config*."""
    gas = (settings or DEFAULT_CONFIG).gas
    family = config.family

    lines: list[tuple[str, int, bool]] = [
        (f"{family.value} Base Deployment", gas.base_costs.get(family.value, 1_200_000), True),
        ("Ownable", gas.ownable, config.ownable),
        ("Burnable", gas.burnable, config.burnable),
        ("Pausable", gas.pausable, config.pausable),
        ("Mintable", gas.mintable, config.mint_entrypoint_emitted),
        ("ERC-2981 Royalties", gas.royalties,
         config.royalties_enabled and family == ContractFamily.ERC721),
        ("Reveal System", gas.reveal,
         config.reveal_enabled and family == ContractFamily.ERC721),
        ("Permit (EIP-2612)", gas.permit,
         config.permit_enabled and family == ContractFamily.ERC20),
        ("ERC-2771 Gasless (Circle)", gas.gasless, config.uses_meta_transaction_infra),
        ("USDC Payment Logic", gas.payment, config.collects_payment),
    ]

    breakdown = [GasLineItem(item=label, gas=cost) for label, cost, enabled in lines if enabled]
    total = sum(line.gas for line in breakdown)
    cost = (Decimal(total) * gas.price_per_unit_usdc).quantize(
        Decimal("0.0001"), rounding=ROUND_HALF_UP
    )

    return GasEstimate(
        estimated_gas=total,
        estimated_cost_usdc=f"{cost:.4f}",
        breakdown=breakdown,
    )
