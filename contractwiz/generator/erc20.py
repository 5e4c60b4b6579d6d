"""ERC-20 (fungible token) assembler.

Fungible tokens never expose a public or limited mint: ``mint`` is always
owner-only, so it is only emitted for ownable contracts.  Paid-mint settings
are ignored for this family.
"""

from __future__ import annotations

from contractwiz.models import DEFAULT_DECIMALS, ContractConfiguration, ContractFamily

from . import features
from .base import ContractAssembler
from .features import OZ, SENDER_HOOKS, render_guards
from .fragments import Fragment, HookSpec

ERC20_HOOKS: dict[str, HookSpec] = {
    "_update": HookSpec(
        name="_update",
        params=("address from", "address to", "uint256 value"),
        args=("from", "to", "value"),
    ),
    **SENDER_HOOKS,
}


class FungibleTokenAssembler(ContractAssembler):
    """Generates ERC-20 tokens."""

    family = ContractFamily.ERC20
    standard = "ERC20"
    notice = "ERC20 contract compatible with Circle Programmable Wallets"
    hooks = ERC20_HOOKS

    def fragments(self, config: ContractConfiguration) -> list[Fragment]:
        return [
            self.token_base(config, config.name, config.symbol),
            features.meta_transactions(config, self.network),
            features.burnable(config, self.standard),
            features.pausable(config, self.standard),
            features.ownable(config),
            self.permit(config),
            self.supply(config),
            self.mint(config),
        ]

    def dev_note(self, config: ContractConfiguration) -> str:
        note = "Includes EIP-2612 Permit for gasless approvals. " if config.permit_enabled else ""
        if config.uses_meta_transaction_infra:
            note += "Includes ERC-2771 for meta-transactions. "
        return note

    def permit(self, config: ContractConfiguration) -> Fragment:
        if not config.permit_enabled:
            return Fragment()
        return Fragment(
            imports=[f"{OZ}/token/ERC20/extensions/ERC20Permit.sol"],
            bases=["ERC20Permit"],
            ctor_args=[f'ERC20Permit("{config.name}")'],
        )

    def supply(self, config: ContractConfiguration) -> Fragment:
        """Initial supply minted once to the deployer, plus the decimals override."""
        fragment = Fragment()
        if config.initial_supply:
            fragment.ctor_body.append(
                f"_mint(_msgSender(), {config.initial_supply} * 10 ** {config.decimals});"
            )
        if config.decimals != DEFAULT_DECIMALS:
            fragment.functions.append(
                "    function decimals() public pure override returns (uint8) {\n"
                f"        return {config.decimals};\n"
                "    }"
            )
        return fragment

    def mint(self, config: ContractConfiguration) -> Fragment:
        if not config.mint_entrypoint_emitted:
            return Fragment()
        guards = [features.PAUSE_GUARD] if config.pausable else []
        return Fragment(functions=[
            "    function mint(address to, uint256 amount) public onlyOwner {\n"
            f"{render_guards(guards)}"
            "        _mint(to, amount);\n"
            "    }"
        ])
