"""Properties that hold for every generated contract, across families.

Covers:
- Determinism of ``generate_contract``
- At most one override per inherited hook
- Owner-only mints never collect payment
- Contracts that cannot mint declare no USDC payment state
- Network constants come from the injected settings
- The two-token reference walk at depth 2
"""

from __future__ import annotations

import itertools

import pytest

from contractwiz.generator import ASSEMBLERS, generate_contract, get_assembler
from contractwiz.generator.content_model import RecursiveContentModel
from contractwiz.models import ContractConfiguration, ContractFamily

pytestmark = pytest.mark.unit

HOOK_DECLARATIONS = (
    "function _update(",
    "function supportsInterface(",
    "function _msgSender(",
    "function _msgData(",
    "function _contextSuffixLength(",
    "function _baseURI(",
    "function tokenURI(",
)

TOGGLES = ("burnable", "pausable", "royalties_enabled", "reveal_enabled", "meta_transactions_enabled")


def _toggle_grid():
    for family in ContractFamily:
        for values in itertools.product((False, True), repeat=len(TOGGLES)):
            yield family, dict(zip(TOGGLES, values))


GRID = list(_toggle_grid())


@pytest.mark.parametrize("family, toggles", GRID)
def test_hooks_declared_at_most_once(family, toggles):
    config = ContractConfiguration(
        family=family,
        base_uri_mode="modifiable",
        base_uri="ipfs://base/",
        mint_policy="publicWithLimit",
        max_per_wallet=2,
        paid_mint_enabled=True,
        mint_price="1",
        **toggles,
    )
    source = generate_contract(config)
    for declaration in HOOK_DECLARATIONS:
        assert source.count(declaration) <= 1, declaration


@pytest.mark.parametrize("family", list(ContractFamily))
def test_generation_is_deterministic(family, full_erc721):
    config = full_erc721.model_copy(update={"family": family})
    first = generate_contract(config)
    second = generate_contract(ContractConfiguration(**config.model_dump()))
    assert first == second


@pytest.mark.parametrize("family", list(ContractFamily))
def test_owner_only_mint_never_collects_payment(family, make_config):
    source = generate_contract(make_config(
        family, mint_policy="onlyOwner", paid_mint_enabled=True, mint_price="9",
    ))
    assert "transferFrom" not in source
    assert "mintPrice" not in source


@pytest.mark.parametrize("family", [ContractFamily.ERC721, ContractFamily.ERC1155, ContractFamily.X420])
def test_unmintable_contract_declares_no_usdc(family, make_config):
    source = generate_contract(make_config(
        family, mintable=False, mint_policy="public", paid_mint_enabled=True, mint_price="1",
    ))
    assert "interface IERC20" not in source
    assert "IERC20 public constant USDC" not in source
    assert "@custom:usdc" not in source
    assert "mintPrice" not in source
    assert "function withdraw(" not in source


def test_shared_update_hook_combines_pause_and_sender(full_erc721):
    source = generate_contract(full_erc721)
    assert source.count("function _update(") == 1
    assert source.count("function supportsInterface(") == 1
    assert "override(ERC721, ERC2981)" in source
    assert "        whenNotPaused\n" in source
    assert "override(Context, ERC2771Context)" in source


def test_meta_transactions_also_enabled_by_native_gas(make_config):
    source = generate_contract(make_config(
        native_stablecoin_gas_enabled=True, sponsor_address="0xabc",
    ))
    assert "ERC2771Context(0x71bE63fcc4540BE48f49BA3371Ca0670355f3068)" in source
    assert " * @custom:paymaster 0xabc" in source


def test_sponsor_omitted_without_meta_transactions(make_config):
    source = generate_contract(make_config(sponsor_address="0xabc"))
    assert "@custom:paymaster" not in source


class TestInjectedNetwork:
    @pytest.mark.parametrize("family", list(ContractFamily))
    def test_constants_follow_settings(self, family, make_config, custom_settings):
        config = make_config(
            family, mint_policy="public", paid_mint_enabled=True, mint_price="1",
            meta_transactions_enabled=True,
        )
        source = generate_contract(config, custom_settings)
        assert "Trusted Forwarder: 0x2222222222222222222222222222222222222222" in source
        assert "@custom:network Arc Devnet (Chain ID: 777)" in source
        assert "0x3600000000000000000000000000000000000000" not in source
        assert "0x71bE63fcc4540BE48f49BA3371Ca0670355f3068" not in source
        if config.paid_mint_applies:
            assert "IERC20(0x1111111111111111111111111111111111111111)" in source

    def test_default_network(self, make_config):
        source = generate_contract(make_config())
        assert "@custom:network Arc Testnet (Chain ID: 5042002)" in source
        assert "Trusted Forwarder: 0x71bE63fcc4540BE48f49BA3371Ca0670355f3068" in source

    def test_pragma_from_settings(self, make_config, settings):
        custom = settings.model_copy(update={"solidity_pragma": "^0.8.24"})
        source = generate_contract(make_config(), custom)
        assert "pragma solidity ^0.8.24;" in source


def test_every_family_registered():
    assert set(ASSEMBLERS) == set(ContractFamily)
    for family in ContractFamily:
        assert get_assembler(family).family == family


def test_two_token_walk_at_depth_two():
    model = RecursiveContentModel(depth_limit=2)
    first = model.mint("ipfs://one")
    second = model.mint("ipfs://two")
    model.add_reference(first, second)

    resolved = model.resolve(first, 2)

    assert resolved == ["ipfs://one", "ipfs://two", ""]
    assert len(resolved) == 3
