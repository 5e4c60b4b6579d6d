"""X420 (recursive content) assembler.

An ERC-721 where each token carries a content URI and a list of references
to other tokens, bounded by ``MAX_RECURSION_DEPTH``.  ``resolveRecursive``
follows the first reference of each node and returns ``depth + 1`` URIs,
leaving trailing slots empty once a node has no reference.

:mod:`contractwiz.generator.content_model` mirrors these semantics in
Python.
"""

from __future__ import annotations

from contractwiz.models import ContractConfiguration, ContractFamily

from . import features
from .base import ContractAssembler
from .erc721 import ERC721_HOOKS
from .features import OZ, render_guards
from .fragments import Fragment

_CONTENT_FUNCTIONS = """    /**
     * @notice Set the content URI for a token (token owner only)
     * @param tokenId The token ID to set content for
     * @param uri The content URI (IPFS, Arweave, etc.)
     */
    function setContentURI(uint256 tokenId, string memory uri) external {
        require(ownerOf(tokenId) == _msgSender(), "Not token owner");
        _contentURIs[tokenId] = uri;
    }

    /**
     * @notice Add a recursive reference to another token
     * @param tokenId The source token ID
     * @param referencedTokenId The token ID to reference
     */
    function addReference(uint256 tokenId, uint256 referencedTokenId) external {
        require(ownerOf(tokenId) == _msgSender(), "Not token owner");
        require(_references[tokenId].length < MAX_RECURSION_DEPTH, "Max recursion depth reached");
        _requireOwned(referencedTokenId);
        _references[tokenId].push(referencedTokenId);
    }

    /**
     * @notice Get all references for a token
     * @param tokenId The token ID to query
     * @return Array of referenced token IDs
     */
    function getReferences(uint256 tokenId) external view returns (uint256[] memory) {
        _requireOwned(tokenId);
        return _references[tokenId];
    }

    /**
     * @notice Resolve recursive content URIs up to specified depth
     * @param tokenId The starting token ID
     * @param depth The recursion depth (max: MAX_RECURSION_DEPTH)
     * @return Array of depth + 1 content URIs following the reference chain
     */
    function resolveRecursive(uint256 tokenId, uint8 depth) external view returns (string[] memory) {
        require(depth <= MAX_RECURSION_DEPTH, "Depth exceeds max");
        _requireOwned(tokenId);

        string[] memory uris = new string[](uint256(depth) + 1);
        uris[0] = _contentURIs[tokenId];

        uint256 currentToken = tokenId;
        for (uint8 i = 1; i <= depth; i++) {
            uint256[] memory refs = _references[currentToken];
            if (refs.length == 0) break;
            currentToken = refs[0];
            uris[i] = _contentURIs[currentToken];
        }

        return uris;
    }

    /**
     * @notice Returns the token URI for marketplace and wallet visualization
     * @param tokenId The token ID to query
     * @return The content URI, else base URI + tokenId, else empty
     */
    function tokenURI(uint256 tokenId) public view override returns (string memory) {
        _requireOwned(tokenId);

        string memory contentUri = _contentURIs[tokenId];
        if (bytes(contentUri).length > 0) {
            return contentUri;
        }

        string memory base = _baseTokenURI;
        if (bytes(base).length > 0) {
            return string(abi.encodePacked(base, Strings.toString(tokenId)));
        }

        return "";
    }"""

_SET_BASE_URI = """    /**
     * @notice Set the base URI for token metadata
     * @param newURI The new base URI
     */
    function setBaseURI(string memory newURI) external onlyOwner {
        _baseTokenURI = newURI;
    }"""


class RecursiveContentAssembler(ContractAssembler):
    """Generates X420 recursive-content NFTs."""

    family = ContractFamily.X420
    standard = "ERC721"
    title = "X420 Experimental NFT Contract"
    notice = "Recursive content NFT with depth-based references compatible with Circle Wallets"
    hooks = ERC721_HOOKS

    def fragments(self, config: ContractConfiguration) -> list[Fragment]:
        return [
            self.token_base(config, config.name, config.symbol),
            features.meta_transactions(config, self.network),
            features.burnable(config, self.standard),
            features.pausable(config, self.standard),
            features.ownable(config),
            self.content(config),
            self.limits(config),
            features.usdc_payment(config, self.network),
            self.mint(config),
            features.withdrawal(config),
        ]

    def content(self, config: ContractConfiguration) -> Fragment:
        fragment = Fragment(
            imports=[f"{OZ}/utils/Strings.sol"],
            state_vars=[
                "uint256 private _nextTokenId = 1;",
                f"uint8 public constant MAX_RECURSION_DEPTH = {config.recursion_depth_limit};",
                f'string public constant CONTENT_TYPE = "{config.media_kind.value}";',
                "mapping(uint256 => uint256[]) private _references;",
                "mapping(uint256 => string) private _contentURIs;",
                "string private _baseTokenURI;",
            ],
            functions=[_CONTENT_FUNCTIONS],
        )
        if config.base_uri:
            fragment.ctor_body.append(f'_baseTokenURI = "{config.base_uri}";')
        if config.ownable:
            fragment.functions.append(_SET_BASE_URI)
        return fragment

    def limits(self, config: ContractConfiguration) -> Fragment:
        if not (config.mintable and config.limit_applies):
            return Fragment()
        return Fragment(state_vars=[
            "mapping(address => uint256) public minted;",
            f"uint256 public constant MAX_PER_WALLET = {config.max_per_wallet};",
        ])

    def mint(self, config: ContractConfiguration) -> Fragment:
        if not config.mintable:
            return Fragment()
        guards: list[str] = []
        if config.pausable:
            guards.append(features.PAUSE_GUARD)
        if config.limit_applies:
            guards.append('require(minted[_msgSender()] < MAX_PER_WALLET, "Mint limit reached");')
            guards.append("minted[_msgSender()]++;")
        if config.paid_mint_applies:
            guards.append(features.payment_guard())
        return Fragment(functions=[
            "    function safeMint(address to, string memory contentUri) public "
            f"{features.mint_modifier(config)}returns (uint256) {{\n"
            f"{render_guards(guards)}"
            "        uint256 tokenId = _nextTokenId++;\n"
            "        _safeMint(to, tokenId);\n"
            "        _contentURIs[tokenId] = contentUri;\n"
            "        return tokenId;\n"
            "    }"
        ])
