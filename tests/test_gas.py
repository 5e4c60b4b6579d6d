"""Tests for contractwiz.gas -- the additive deployment estimate."""

from __future__ import annotations

import itertools
from decimal import Decimal

import pytest

from contractwiz.config import Config, GasConfig
from contractwiz.gas import estimate_gas_cost
from contractwiz.models import ContractConfiguration, ContractFamily

pytestmark = pytest.mark.unit

ORDER = [
    "Ownable",
    "Burnable",
    "Pausable",
    "Mintable",
    "ERC-2981 Royalties",
    "Reveal System",
    "Permit (EIP-2612)",
    "ERC-2771 Gasless (Circle)",
    "USDC Payment Logic",
]


def test_base_only():
    config = ContractConfiguration(ownable=False, mintable=False)
    estimate = estimate_gas_cost(config)
    assert estimate.estimated_gas == 1_200_000
    assert estimate.estimated_cost_usdc == "0.0240"
    assert [line.item for line in estimate.breakdown] == ["ERC721 Base Deployment"]


def test_default_erc721():
    estimate = estimate_gas_cost(ContractConfiguration())
    assert estimate.estimated_gas == 1_200_000 + 50_000 + 120_000
    assert estimate.estimated_cost_usdc == "0.0274"


def test_full_erc721(full_erc721):
    estimate = estimate_gas_cost(full_erc721)
    items = [line.item for line in estimate.breakdown]
    assert items == [
        "ERC721 Base Deployment",
        "Ownable",
        "Burnable",
        "Pausable",
        "Mintable",
        "ERC-2981 Royalties",
        "Reveal System",
        "ERC-2771 Gasless (Circle)",
        "USDC Payment Logic",
    ]
    assert estimate.estimated_gas == 2_080_000
    assert estimate.estimated_cost_usdc == "0.0416"


def test_family_specific_lines_are_ignored_elsewhere():
    config = ContractConfiguration(
        family=ContractFamily.ERC1155, royalties_enabled=True, reveal_enabled=True,
        permit_enabled=True,
    )
    items = [line.item for line in estimate_gas_cost(config).breakdown]
    assert "ERC-2981 Royalties" not in items
    assert "Reveal System" not in items
    assert "Permit (EIP-2612)" not in items


def test_permit_on_erc20():
    config = ContractConfiguration(family=ContractFamily.ERC20, permit_enabled=True)
    estimate = estimate_gas_cost(config)
    assert estimate.breakdown[0].item == "ERC20 Base Deployment"
    assert "Permit (EIP-2612)" in estimate.as_rows()
    assert estimate.estimated_gas == 800_000 + 50_000 + 120_000 + 180_000


def test_payment_requires_non_owner_mint():
    owner_only = ContractConfiguration(paid_mint_enabled=True, mint_price="1")
    public = owner_only.model_copy(update={"mint_policy": "public"})
    assert "USDC Payment Logic" not in estimate_gas_cost(owner_only).as_rows()
    assert "USDC Payment Logic" in estimate_gas_cost(public).as_rows()


@pytest.mark.parametrize("family", list(ContractFamily))
@pytest.mark.parametrize("flags", list(itertools.product((False, True), repeat=4)))
def test_total_is_sum_of_lines_in_fixed_order(family, flags):
    ownable, burnable, pausable, gasless = flags
    config = ContractConfiguration(
        family=family, ownable=ownable, burnable=burnable, pausable=pausable,
        native_stablecoin_gas_enabled=gasless, royalties_enabled=True, permit_enabled=True,
    )
    estimate = estimate_gas_cost(config)
    assert estimate.estimated_gas == sum(line.gas for line in estimate.breakdown)

    labels = [line.item for line in estimate.breakdown[1:]]
    assert labels == [label for label in ORDER if label in labels]
    assert ("Ownable" in labels) is ownable
    assert ("ERC-2771 Gasless (Circle)" in labels) is gasless


def test_custom_costs():
    settings = Config(gas=GasConfig(price_per_unit_usdc=Decimal("0.000001"), ownable=1))
    estimate = estimate_gas_cost(ContractConfiguration(mintable=False), settings)
    assert estimate.estimated_gas == 1_200_001
    assert estimate.estimated_cost_usdc == "1.2000"


def test_as_rows_formats_thousands():
    rows = estimate_gas_cost(ContractConfiguration()).as_rows()
    assert rows["ERC721 Base Deployment"] == "1,200,000"


def test_erc20_without_owner_has_no_mint_line():
    config = ContractConfiguration(family=ContractFamily.ERC20, ownable=False, mintable=True)
    rows = estimate_gas_cost(config).as_rows()
    assert "Mintable" not in rows
    assert estimate_gas_cost(config).estimated_gas == 800_000


def test_payment_requires_mint_entrypoint():
    config = ContractConfiguration(
        mintable=False, mint_policy="public", paid_mint_enabled=True, mint_price="1",
    )
    assert "USDC Payment Logic" not in estimate_gas_cost(config).as_rows()
