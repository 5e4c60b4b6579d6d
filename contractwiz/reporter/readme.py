"""README deployment-guide generator.

Produces the ``README.md`` shipped next to a generated contract: network
settings, the feature checklist, Remix deployment steps, and Circle Wallet /
USDC integration notes.  Every network constant comes from the same
``Config`` the assembler used, and every claim (gasless support, paid mint)
is derived from the same configuration properties the assembler checks.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from pydantic import BaseModel, Field
from rich.console import Console

from contractwiz.config import DEFAULT_CONFIG, Config
from contractwiz.models import ContractConfiguration, ContractFamily, MintPolicy
from contractwiz.utils import contract_filename, write_text

console = Console()


# ---------------------------------------------------------------------------
# Data Models
# ---------------------------------------------------------------------------

class FeatureCheck(BaseModel):
    """One line of the README feature checklist."""

    label: str = Field(..., description="Feature name as shown to the reader")
    detail: str = Field(default="", description="Parenthesised detail, if any")

    def render(self) -> str:
        suffix = f" ({self.detail})" if self.detail else ""
        return f"- ✅ {self.label}{suffix}"


# ---------------------------------------------------------------------------
# ReadmeGenerator
# ---------------------------------------------------------------------------

class ReadmeGenerator:
    """Generates the deployment guide for one contract configuration."""

    def __init__(self, settings: Config | None = None) -> None:
        self.settings = settings or DEFAULT_CONFIG

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, config: ContractConfiguration) -> str:
        """Return the README markdown for *config*."""
        return self._render(config, self.feature_checklist(config))

    async def generate(self, config: ContractConfiguration, output_path: str | Path) -> Path:
        """Render the README and write it to *output_path*.

        Returns the resolved output path.
        """
        output = Path(output_path).resolve()
        content = self.render(config)
        await asyncio.to_thread(write_text, output, content)
        console.print(f"[green]README written to {output}[/green]")
        return output

    # ------------------------------------------------------------------
    # Checklist
    # ------------------------------------------------------------------

    def feature_checklist(self, config: ContractConfiguration) -> list[FeatureCheck]:
        """Enabled features in display order."""
        checks: list[FeatureCheck] = []
        if config.ownable:
            checks.append(FeatureCheck(label="Ownable", detail="Owner-controlled functions"))
        if config.mint_entrypoint_emitted:
            checks.append(FeatureCheck(label="Mintable", detail=self._mint_detail(config)))
        if config.burnable:
            checks.append(FeatureCheck(label="Burnable"))
        if config.pausable:
            checks.append(FeatureCheck(label="Pausable"))
        if config.uses_meta_transaction_infra:
            checks.append(FeatureCheck(
                label="Gasless Transactions", detail="ERC-2771 via Circle Wallets"
            ))
        if config.collects_payment:
            checks.append(FeatureCheck(label="Paid Mint", detail=f"{config.mint_price} USDC"))
        if config.family == ContractFamily.ERC721:
            if config.max_supply is not None and config.mintable:
                checks.append(FeatureCheck(label="Max Supply", detail=str(config.max_supply)))
            if config.reveal_enabled:
                checks.append(FeatureCheck(label="Reveal System"))
            if config.royalties_enabled:
                percent = config.royalty_basis_points / 100
                checks.append(FeatureCheck(label="Royalties", detail=f"{percent:g}%"))
        if config.family == ContractFamily.ERC20:
            if config.permit_enabled:
                checks.append(FeatureCheck(
                    label="Permit", detail="EIP-2612 signed approvals"
                ))
            if config.initial_supply:
                checks.append(FeatureCheck(
                    label="Initial Supply",
                    detail=f"{config.initial_supply} tokens, {config.decimals} decimals",
                ))
        if config.family == ContractFamily.X420:
            checks.append(FeatureCheck(
                label="Recursive References",
                detail=f"max depth {config.recursion_depth_limit}, {config.media_kind.value}",
            ))
        return checks

    @staticmethod
    def _mint_detail(config: ContractConfiguration) -> str:
        if config.family == ContractFamily.ERC20:
            return "owner only"
        if config.mint_policy == MintPolicy.ONLY_OWNER:
            return "owner only" if config.ownable else "public"
        if config.limit_applies:
            return f"public, {config.max_per_wallet} per wallet"
        return "public"

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, config: ContractConfiguration, checks: list[FeatureCheck]) -> str:
        network = self.settings.network
        gasless = config.uses_meta_transaction_infra
        paid = config.collects_payment
        sections: list[str] = []

        sections.append(f"# {config.name} - Smart Contract")
        sections.append("")

        # Network table
        sections.append("## Network Configuration")
        sections.append("")
        sections.append("| Property | Value |")
        sections.append("|----------|-------|")
        sections.append(f"| **Network** | {network.name} |")
        sections.append(f"| **Chain ID** | {network.chain_id} |")
        sections.append(f"| **RPC URL** | {network.rpc_url} |")
        sections.append(f"| **Block Explorer** | {network.explorer_url} |")
        sections.append(f"| **USDC Address** | {network.usdc_address} |")
        sections.append(f"| **Trusted Forwarder** | {network.trusted_forwarder} |")
        sections.append("")

        sections.append("## Contract Type")
        sections.append("")
        sections.append(f"**{config.family.value}** - {config.symbol}")
        sections.append("")

        sections.append("## Features")
        sections.append("")
        if checks:
            sections.extend(check.render() for check in checks)
        else:
            sections.append("No optional features enabled.")
        sections.append("")

        # Deployment
        sections.append("## Deployment Steps")
        sections.append("")
        sections.append("1. Open [Remix IDE](https://remix.ethereum.org)")
        sections.append(f"2. Create a new file: `{contract_filename(config.name)}`")
        sections.append("3. Paste the contract code")
        sections.append(f"4. Compile with Solidity {self.settings.solidity_pragma}")
        sections.append(f"5. Connect MetaMask to {network.name}:")
        sections.append(f"   - RPC: `{network.rpc_url}`")
        sections.append(f"   - Chain ID: `{network.chain_id}`")
        sections.append('6. Deploy using "Injected Provider"')
        sections.append("")

        # Circle Wallet integration
        sections.append("## Circle Wallet Integration")
        sections.append("")
        if gasless:
            sections.append(
                "This contract supports gasless transactions via Circle Programmable Wallets."
            )
            sections.append(
                f"The Trusted Forwarder address `{network.trusted_forwarder}` is configured "
                "in the constructor."
            )
            sections.append("")
            sections.append("Users with Circle Wallets can:")
            sections.append("- Mint tokens without paying gas fees")
            sections.append("- Transfer tokens gaslessly")
            if config.sponsor_address:
                sections.append(
                    f"- Have transaction fees sponsored by the Paymaster `{config.sponsor_address}`"
                )
            else:
                sections.append("- Have all transaction fees sponsored by the Paymaster")
        else:
            sections.append(
                'Gasless transactions are not enabled. Enable "Arc Gasless" to support '
                "Circle Wallets."
            )
        sections.append("")

        # USDC
        sections.append("## USDC Integration")
        sections.append("")
        sections.append(f"USDC Contract on Arc: `{network.usdc_address}`")
        sections.append("")
        if paid:
            sections.append(f"**Mint Price:** {config.mint_price} USDC")
            sections.append("")
            sections.append("Users must approve the contract to spend USDC before minting.")
            if config.ownable:
                sections.append("The owner collects payments with `withdraw()`.")
        else:
            sections.append("No USDC payment required for minting.")
        sections.append("")

        sections.append("---")
        sections.append("")
        sections.append("*Generated by ArcContractWiz - https://arccontractwiz.xyz*")
        sections.append("")

        return "\n".join(sections)


def render_readme(config: ContractConfiguration, settings: Config | None = None) -> str:
    """Convenience wrapper around :meth:`ReadmeGenerator.render`."""
    return ReadmeGenerator(settings).render(config)
