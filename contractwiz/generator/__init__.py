"""Contract source generation.

One assembler per contract family behind a common ``generate(config)``
contract; :func:`generate_contract` dispatches on ``config.family``.

Quick usage::

    from contractwiz.generator import generate_contract
    from contractwiz.models import ContractConfiguration, ContractFamily

    source = generate_contract(ContractConfiguration(family=ContractFamily.ERC20))
"""

from __future__ import annotations

from contractwiz.config import Config
from contractwiz.models import ContractConfiguration, ContractFamily

from .base import ContractAssembler
from .erc20 import FungibleTokenAssembler
from .erc721 import UniqueTokenAssembler
from .erc1155 import MultiTokenAssembler
from .templates import TemplateRenderer
from .x420 import RecursiveContentAssembler

ASSEMBLERS: dict[ContractFamily, type[ContractAssembler]] = {
    ContractFamily.ERC721: UniqueTokenAssembler,
    ContractFamily.ERC1155: MultiTokenAssembler,
    ContractFamily.ERC20: FungibleTokenAssembler,
    ContractFamily.X420: RecursiveContentAssembler,
}


def get_assembler(
    family: ContractFamily,
    settings: Config | None = None,
) -> ContractAssembler:
    """Instantiate the assembler registered for *family*."""
    return ASSEMBLERS[family](settings)


def generate_contract(
    config: ContractConfiguration,
    settings: Config | None = None,
) -> str:
    """Return the Solidity source for *config*."""
    return get_assembler(config.family, settings).generate(config)


__all__ = [
    "ASSEMBLERS",
    "ContractAssembler",
    "FungibleTokenAssembler",
    "MultiTokenAssembler",
    "RecursiveContentAssembler",
    "TemplateRenderer",
    "UniqueTokenAssembler",
    "generate_contract",
    "get_assembler",
]
