"""ERC-721 (unique token) assembler.

Pipeline order: token base, meta-transactions, burnable, pausable, ownable,
royalties, metadata URI strategy, counter and limits, USDC payment, mint,
withdrawal.  The reveal strategy replaces the base-URI accessor entirely, so
at most one of ``_baseURI`` / ``tokenURI`` is overridden.
"""

from __future__ import annotations

from contractwiz.models import BaseUriMode, ContractConfiguration, ContractFamily

from . import features
from .base import ContractAssembler
from .features import OZ, SENDER_HOOKS, render_guards
from .fragments import Fragment, HookClaim, HookSpec

ERC721_HOOKS: dict[str, HookSpec] = {
    "_update": HookSpec(
        name="_update",
        params=("address to", "uint256 tokenId", "address auth"),
        args=("to", "tokenId", "auth"),
        returns="address",
    ),
    "supportsInterface": HookSpec(
        name="supportsInterface",
        params=("bytes4 interfaceId",),
        args=("interfaceId",),
        visibility="public",
        mutability="view",
        returns="bool",
    ),
    **SENDER_HOOKS,
}


def supply_comparison(start_token_id: int) -> str:
    """Upper-bound operator for the supply guard.

    Counting from 1 the last valid id equals the cap (``<=``); counting from
    0 it is one below the cap (``<``).
    """
    return "<=" if start_token_id == 1 else "<"


class UniqueTokenAssembler(ContractAssembler):
    """Generates ERC-721 collections."""

    family = ContractFamily.ERC721
    standard = "ERC721"
    notice = "ERC721 contract compatible with Circle Programmable Wallets and USDC payments"
    hooks = ERC721_HOOKS

    def fragments(self, config: ContractConfiguration) -> list[Fragment]:
        return [
            self.token_base(config, config.name, config.symbol),
            features.meta_transactions(config, self.network),
            features.burnable(config, self.standard),
            features.pausable(config, self.standard),
            features.ownable(config),
            self.royalties(config),
            self.metadata(config),
            self.counters(config),
            features.usdc_payment(config, self.network),
            self.mint(config),
            features.withdrawal(config),
        ]

    # -- Features -----------------------------------------------------------

    def royalties(self, config: ContractConfiguration) -> Fragment:
        if not config.royalties_enabled:
            return Fragment()
        receiver = config.royalty_receiver or "_msgSender()"
        return Fragment(
            imports=[f"{OZ}/token/common/ERC2981.sol"],
            bases=["ERC2981"],
            ctor_body=[f"_setDefaultRoyalty({receiver}, {config.royalty_basis_points});"],
            claims=[HookClaim("supportsInterface", ("ERC721", "ERC2981"))],
        )

    def metadata(self, config: ContractConfiguration) -> Fragment:
        if config.reveal_enabled:
            return self._reveal(config)
        if config.base_uri_mode == BaseUriMode.FIXED:
            return Fragment(
                state_vars=[f'string private constant BASE_TOKEN_URI = "{config.base_uri}";'],
                functions=[
                    "    function _baseURI() internal pure override returns (string memory) {\n"
                    "        return BASE_TOKEN_URI;\n"
                    "    }"
                ],
            )
        if config.base_uri_mode == BaseUriMode.MODIFIABLE:
            fragment = Fragment(
                state_vars=["string private _baseTokenURI;"],
                functions=[
                    "    function _baseURI() internal view override returns (string memory) {\n"
                    "        return _baseTokenURI;\n"
                    "    }"
                ],
            )
            if config.base_uri:
                fragment.ctor_body.append(f'_baseTokenURI = "{config.base_uri}";')
            if config.ownable:
                fragment.functions.append(_SET_BASE_URI)
            return fragment
        return Fragment()

    def _reveal(self, config: ContractConfiguration) -> Fragment:
        fragment = Fragment(
            imports=[f"{OZ}/utils/Strings.sol"],
            state_vars=[
                "string private _baseTokenURI;",
                "string private _hiddenURI;",
                "bool public revealed = false;",
            ],
            functions=[
                "    function tokenURI(uint256 tokenId) public view override returns (string memory) {\n"
                "        _requireOwned(tokenId);\n"
                "        if (!revealed) {\n"
                "            return _hiddenURI;\n"
                "        }\n"
                "        return string(abi.encodePacked(_baseTokenURI, Strings.toString(tokenId)));\n"
                "    }"
            ],
        )
        if config.base_uri_mode != BaseUriMode.NONE and config.base_uri:
            fragment.ctor_body.append(f'_baseTokenURI = "{config.base_uri}";')
        if config.hidden_uri:
            fragment.ctor_body.append(f'_hiddenURI = "{config.hidden_uri}";')
        if config.ownable:
            fragment.functions.extend([
                _SET_BASE_URI,
                "    function setHiddenURI(string memory hidden) external onlyOwner {\n"
                "        _hiddenURI = hidden;\n"
                "    }",
                "    function reveal() external onlyOwner {\n"
                "        revealed = true;\n"
                "    }",
            ])
        return fragment

    def counters(self, config: ContractConfiguration) -> Fragment:
        if not config.mintable:
            return Fragment()
        state = [f"uint256 private _nextTokenId = {config.start_token_id};"]
        if config.max_supply is not None:
            state.append(f"uint256 public constant MAX_SUPPLY = {config.max_supply};")
        if config.limit_applies:
            state.append("mapping(address => uint256) public minted;")
            state.append(f"uint256 public constant MAX_PER_WALLET = {config.max_per_wallet};")
        return Fragment(state_vars=state)

    def mint(self, config: ContractConfiguration) -> Fragment:
        if not config.mintable:
            return Fragment()
        guards: list[str] = []
        if config.pausable:
            guards.append(features.PAUSE_GUARD)
        if config.max_supply is not None:
            op = supply_comparison(config.start_token_id)
            guards.append(f'require(_nextTokenId {op} MAX_SUPPLY, "Max supply reached");')
        if config.limit_applies:
            guards.append('require(minted[_msgSender()] < MAX_PER_WALLET, "Mint limit reached");')
            guards.append("minted[_msgSender()]++;")
        if config.paid_mint_applies:
            guards.append(features.payment_guard())
        return Fragment(functions=[
            f"    function safeMint(address to) public {features.mint_modifier(config)}{{\n"
            f"{render_guards(guards)}"
            "        uint256 tokenId = _nextTokenId++;\n"
            "        _safeMint(to, tokenId);\n"
            "    }"
        ])


_SET_BASE_URI = (
    "    function setBaseURI(string memory newURI) external onlyOwner {\n"
    "        _baseTokenURI = newURI;\n"
    "    }"
)
