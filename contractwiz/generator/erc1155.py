"""ERC-1155 (multi token) assembler.

Mint limits are tracked per wallet *and* per token id, and the USDC charge
scales with the requested amount.  ``mintBatch`` is owner-only whatever the
mint policy, so it is only emitted for ownable contracts.
"""

from __future__ import annotations

from contractwiz.models import ContractConfiguration, ContractFamily, MintPolicy

from . import features
from .base import ContractAssembler
from .features import SENDER_HOOKS, render_guards
from .fragments import Fragment, HookSpec

ERC1155_HOOKS: dict[str, HookSpec] = {
    "_update": HookSpec(
        name="_update",
        params=("address from", "address to", "uint256[] memory ids", "uint256[] memory values"),
        args=("from", "to", "ids", "values"),
    ),
    **SENDER_HOOKS,
}


class MultiTokenAssembler(ContractAssembler):
    """Generates ERC-1155 multi-token contracts."""

    family = ContractFamily.ERC1155
    standard = "ERC1155"
    title = "{name} - Circle-Compatible ERC1155"
    notice = "ERC1155 Multi-Token contract for Arc Network with Circle Wallet integration"
    hooks = ERC1155_HOOKS

    def fragments(self, config: ContractConfiguration) -> list[Fragment]:
        return [
            self.token_base(config, config.base_uri),
            features.meta_transactions(config, self.network),
            features.burnable(config, self.standard),
            features.pausable(config, self.standard),
            features.ownable(config),
            self.uri_setter(config),
            self.limits(config),
            features.usdc_payment(config, self.network),
            self.mint(config),
            self.mint_batch(config),
            features.withdrawal(config),
        ]

    def uri_setter(self, config: ContractConfiguration) -> Fragment:
        if not (config.base_uri and config.ownable):
            return Fragment()
        return Fragment(functions=[
            "    function setURI(string memory newuri) public onlyOwner {\n"
            "        _setURI(newuri);\n"
            "    }"
        ])

    def limits(self, config: ContractConfiguration) -> Fragment:
        if not (config.mintable and config.limit_applies):
            return Fragment()
        return Fragment(state_vars=[
            "// Tracks: wallet address => token ID => amount minted",
            "mapping(address => mapping(uint256 => uint256)) public mintedPerWallet;",
            f"uint256 public constant MAX_PER_WALLET_PER_ID = {config.max_per_wallet};",
        ])

    def mint(self, config: ContractConfiguration) -> Fragment:
        if not config.mintable:
            return Fragment()
        guards: list[str] = []
        if config.pausable:
            guards.append(features.PAUSE_GUARD)
        if config.limit_applies:
            guards.append(
                "require(mintedPerWallet[_msgSender()][id] + amount <= MAX_PER_WALLET_PER_ID, "
                '"Limit reached for this token ID");'
            )
            guards.append("mintedPerWallet[_msgSender()][id] += amount;")
        if config.paid_mint_applies:
            guards.append(features.payment_guard("mintPrice * amount"))

        return Fragment(functions=[
            "    /**\n"
            f"     * @notice Mint tokens - {_access_label(config)}\n"
            "     * @param account Recipient address\n"
            "     * @param id Token ID to mint\n"
            "     * @param amount Amount of tokens to mint\n"
            "     * @param data Additional data\n"
            "     */\n"
            "    function mint(address account, uint256 id, uint256 amount, bytes memory data) "
            f"public {features.mint_modifier(config)}{{\n"
            f"{render_guards(guards)}"
            "        _mint(account, id, amount, data);\n"
            "    }"
        ])

    def mint_batch(self, config: ContractConfiguration) -> Fragment:
        if not (config.mintable and config.ownable):
            return Fragment()
        guards = [features.PAUSE_GUARD] if config.pausable else []
        return Fragment(functions=[
            "    /**\n"
            "     * @notice Batch mint - always restricted to the owner\n"
            "     */\n"
            "    function mintBatch(\n"
            "        address to,\n"
            "        uint256[] memory ids,\n"
            "        uint256[] memory amounts,\n"
            "        bytes memory data\n"
            "    ) public onlyOwner {\n"
            f"{render_guards(guards)}"
            "        _mintBatch(to, ids, amounts, data);\n"
            "    }"
        ])


def _access_label(config: ContractConfiguration) -> str:
    if config.mint_policy == MintPolicy.ONLY_OWNER and config.ownable:
        return "Only Owner"
    if config.limit_applies:
        return "Public with wallet limit per token ID"
    if config.paid_mint_applies:
        return "Public with USDC payment"
    return "Public"
