"""In-memory model of the X420 reference semantics.

The generator never executes Solidity, so this class reproduces what the
emitted ``addReference`` / ``resolveRecursive`` / ``tokenURI`` functions do,
one method per contract function.  Errors carry the same revert reasons as
the generated contract.

Typical usage::

    model = RecursiveContentModel(depth_limit=2)
    first = model.mint("ipfs://a")
    second = model.mint("ipfs://b")
    model.add_reference(first, second)
    model.resolve(first, 2)   # ["ipfs://a", "ipfs://b", ""]
"""

from __future__ import annotations

from dataclasses import dataclass, field

from contractwiz.models import ContractConfiguration


class ContentModelError(Exception):
    """Base class for rejected X420 operations."""


class RecursionLimitError(ContentModelError):
    """Raised when a reference list or a resolution depth exceeds the limit."""


class UnknownTokenError(ContentModelError):
    """Raised when an operation names a token that was never minted."""

    def __init__(self, token_id: int) -> None:
        self.token_id = token_id
        super().__init__(f"ERC721NonexistentToken({token_id})")


@dataclass
class RecursiveContentModel:
    """Token content, references and the resolution walk."""

    depth_limit: int
    base_uri: str = ""
    next_token_id: int = 1
    _content: dict[int, str] = field(default_factory=dict)
    _references: dict[int, list[int]] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: ContractConfiguration) -> "RecursiveContentModel":
        return cls(depth_limit=config.recursion_depth_limit, base_uri=config.base_uri)

    # -- Contract operations ------------------------------------------------

    def mint(self, content_uri: str = "") -> int:
        token_id = self.next_token_id
        self.next_token_id += 1
        self._content[token_id] = content_uri
        self._references[token_id] = []
        return token_id

    def set_content_uri(self, token_id: int, uri: str) -> None:
        self._require_exists(token_id)
        self._content[token_id] = uri

    def add_reference(self, token_id: int, referenced_token_id: int) -> None:
        """Append a reference; fails at the depth limit or for unknown tokens."""
        self._require_exists(token_id)
        if len(self._references[token_id]) >= self.depth_limit:
            raise RecursionLimitError("Max recursion depth reached")
        self._require_exists(referenced_token_id)
        self._references[token_id].append(referenced_token_id)

    def references(self, token_id: int) -> list[int]:
        self._require_exists(token_id)
        return list(self._references[token_id])

    def resolve(self, token_id: int, depth: int) -> list[str]:
        """Follow first references for *depth* hops.

        Always returns ``depth + 1`` entries; slots after the first node
        without references stay ``""``.
        """
        if depth > self.depth_limit:
            raise RecursionLimitError("Depth exceeds max")
        self._require_exists(token_id)

        uris = [""] * (depth + 1)
        uris[0] = self._content[token_id]
        current = token_id
        for i in range(1, depth + 1):
            refs = self._references.get(current, [])
            if not refs:
                break
            current = refs[0]
            uris[i] = self._content.get(current, "")
        return uris

    def token_uri(self, token_id: int) -> str:
        self._require_exists(token_id)
        if self._content[token_id]:
            return self._content[token_id]
        if self.base_uri:
            return f"{self.base_uri}{token_id}"
        return ""

    # -- Internal -----------------------------------------------------------

    def _require_exists(self, token_id: int) -> None:
        if token_id not in self._content:
            raise UnknownTokenError(token_id)
