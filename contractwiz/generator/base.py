"""Common skeleton shared by the four contract assemblers.

An assembler turns a :class:`ContractConfiguration` into Solidity source in
three steps:

1. :meth:`ContractAssembler.fragments` runs the family's feature pipeline in
   a fixed order and collects one :class:`Fragment` per feature.
2. :func:`merge` combines them into a :class:`ContractPlan`, resolving hook
   claims into one override per hook.
3. The plan is rendered through ``contract.sol.j2``.

Assemblers are stateless apart from their settings; ``generate`` is a pure
function of its argument.
"""

from __future__ import annotations

from contractwiz.config import DEFAULT_CONFIG, Config
from contractwiz.models import ContractConfiguration, ContractFamily

from .fragments import ContractPlan, Fragment, HookSpec, merge
from .templates import CONTRACT_TEMPLATE, TemplateRenderer


class ContractAssembler:
    """Base class for the per-family assemblers.

    Subclasses set :attr:`family`, :attr:`standard`, :attr:`hooks`, the
    documentation strings, and implement :meth:`fragments`.
    """

    family: ContractFamily
    standard: str = ""
    title: str = "Circle-Compatible Smart Contract"
    notice: str = ""
    hooks: dict[str, HookSpec] = {}

    def __init__(
        self,
        settings: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings or DEFAULT_CONFIG
        self.renderer = renderer or TemplateRenderer()

    @property
    def network(self):
        return self.settings.network

    # -- Public API --------------------------------------------------------

    def generate(self, config: ContractConfiguration) -> str:
        """Return the complete Solidity source for *config*."""
        plan = self.plan(config)
        return self.renderer.render(CONTRACT_TEMPLATE, self.context(config, plan))

    def plan(self, config: ContractConfiguration) -> ContractPlan:
        """Run the feature pipeline and merge the fragments."""
        return merge(self.fragments(config), self.hooks)

    def fragments(self, config: ContractConfiguration) -> list[Fragment]:
        raise NotImplementedError

    # -- Shared pieces ------------------------------------------------------

    def token_base(self, config: ContractConfiguration, *ctor_values: str) -> Fragment:
        """The mandatory token-standard base, its import and constructor call."""
        quoted = ", ".join(f'"{value}"' for value in ctor_values)
        return Fragment(
            imports=[f"@openzeppelin/contracts/token/{self.standard}/{self.standard}.sol"],
            bases=[self.standard],
            ctor_args=[f"{self.standard}({quoted})"],
        )

    def dev_note(self, config: ContractConfiguration) -> str:
        if config.uses_meta_transaction_infra:
            return "Includes ERC-2771 for gasless meta-transactions via Circle Wallets. "
        return ""

    def context(self, config: ContractConfiguration, plan: ContractPlan) -> dict:
        return {
            "title": self.title.format(name=config.name),
            "notice": self.notice,
            "dev": self.dev_note(config),
            "network": self.network,
            "uses_usdc": config.collects_payment,
            "sponsor": config.sponsor_address if config.uses_meta_transaction_infra else "",
            "pragma": self.settings.solidity_pragma,
            "name": config.name,
            "plan": plan,
        }
