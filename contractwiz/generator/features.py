"""Feature modules shared by every contract family.

Each function takes the configuration and the network settings and returns
the :class:`Fragment` that feature contributes (an empty fragment when the
feature is off).  None of them emits an inherited-hook override directly;
they file :class:`HookClaim` entries and the merge step writes the single
combined override.
"""

from __future__ import annotations

from contractwiz.config import NetworkConfig
from contractwiz.models import ContractConfiguration, MintPolicy

from .fragments import Fragment, HookClaim, HookSpec

OZ = "@openzeppelin/contracts"

# Sender-resolution hooks shared by all families.  ``ERC2771Context`` is
# named explicitly as the delegate: ``super`` would resolve to whichever
# ``Context`` descendant comes last in the linearisation.
SENDER_HOOKS: dict[str, HookSpec] = {
    "_msgSender": HookSpec(
        name="_msgSender", params=(), args=(), mutability="view",
        returns="address", delegate="ERC2771Context",
    ),
    "_msgData": HookSpec(
        name="_msgData", params=(), args=(), mutability="view",
        returns="bytes calldata", delegate="ERC2771Context",
    ),
    "_contextSuffixLength": HookSpec(
        name="_contextSuffixLength", params=(), args=(), mutability="view",
        returns="uint256", delegate="ERC2771Context",
    ),
}

IERC20_INTERFACE = """interface IERC20 {
    function transferFrom(address sender, address recipient, uint256 amount) external returns (bool);
    function transfer(address recipient, uint256 amount) external returns (bool);
    function balanceOf(address account) external view returns (uint256);
}"""

PAUSE_GUARD = 'require(!paused(), "Contract is paused");'


def mint_modifier(config: ContractConfiguration) -> str:
    """Access modifier for a policy-driven mint entrypoint."""
    if config.mint_policy == MintPolicy.ONLY_OWNER and config.ownable:
        return "onlyOwner "
    return ""


def render_guards(guards: list[str]) -> str:
    """Indent guard statements into a function body (one per line)."""
    return "".join(f"        {line}\n" for line in guards)


# ---------------------------------------------------------------------------
# Shared features, in pipeline order
# ---------------------------------------------------------------------------


def meta_transactions(config: ContractConfiguration, network: NetworkConfig) -> Fragment:
    """ERC-2771 context for gasless calls through the trusted forwarder."""
    if not config.uses_meta_transaction_infra:
        return Fragment()
    return Fragment(
        imports=[f"{OZ}/metatx/ERC2771Context.sol"],
        bases=["ERC2771Context"],
        ctor_args=[f"ERC2771Context({network.trusted_forwarder})"],
        claims=[
            HookClaim(hook, ("Context", "ERC2771Context")) for hook in SENDER_HOOKS
        ],
    )


def burnable(config: ContractConfiguration, standard: str) -> Fragment:
    if not config.burnable:
        return Fragment()
    return Fragment(
        imports=[f"{OZ}/token/{standard}/extensions/{standard}Burnable.sol"],
        bases=[f"{standard}Burnable"],
    )


def pausable(config: ContractConfiguration, standard: str) -> Fragment:
    """Pause switch plus a ``whenNotPaused`` claim on the transfer hook.

    ``pause``/``unpause`` are owner-only, so they are only emitted when the
    contract is ownable.
    """
    if not config.pausable:
        return Fragment()
    functions: list[str] = []
    if config.ownable:
        functions.append(
            "    function pause() public onlyOwner {\n"
            "        _pause();\n"
            "    }\n"
            "\n"
            "    function unpause() public onlyOwner {\n"
            "        _unpause();\n"
            "    }"
        )
    return Fragment(
        imports=[f"{OZ}/utils/Pausable.sol"],
        bases=["Pausable"],
        functions=functions,
        claims=[HookClaim("_update", (standard,), ("whenNotPaused",))],
    )


def ownable(config: ContractConfiguration) -> Fragment:
    if not config.ownable:
        return Fragment()
    return Fragment(
        imports=[f"{OZ}/access/Ownable.sol"],
        bases=["Ownable"],
        ctor_args=["Ownable(_msgSender())"],
    )


def usdc_payment(config: ContractConfiguration, network: NetworkConfig) -> Fragment:
    """Pull-payment collateral: the USDC handle and the mint price.

    Arc's native asset is USDC, so payment is always an explicit
    ``transferFrom`` through the token interface, never ``msg.value``.
    """
    if not config.collects_payment:
        return Fragment()
    return Fragment(
        interfaces=[IERC20_INTERFACE],
        state_vars=[
            f"IERC20 public constant USDC = IERC20({network.usdc_address});",
            "// Mint price in USDC (6 decimals)",
            f"uint256 public mintPrice = {config.mint_price_units};",
        ],
    )


def payment_guard(amount: str = "mintPrice") -> str:
    return (
        f"require(USDC.transferFrom(_msgSender(), address(this), {amount}), "
        '"USDC payment failed");'
    )


def withdrawal(config: ContractConfiguration) -> Fragment:
    """Owner-only sweep of the collected USDC balance."""
    if not (config.collects_payment and config.ownable):
        return Fragment()
    return Fragment(
        functions=[
            "    /**\n"
            "     * @notice Withdraw collected USDC to owner\n"
            "     */\n"
            "    function withdraw() external onlyOwner {\n"
            "        uint256 balance = USDC.balanceOf(address(this));\n"
            '        require(balance > 0, "No USDC to withdraw");\n'
            '        require(USDC.transfer(owner(), balance), "USDC transfer failed");\n'
            "    }"
        ]
    )
