"""Structured contract fragments and the merge step that combines them.

Every feature module returns a :class:`Fragment`.  The assembler merges the
fragments of all enabled features, in pipeline order, into a single
:class:`ContractPlan`.  Inherited hooks are never written by the features
themselves: a feature files a :class:`HookClaim` instead, and the merge step
emits exactly one override per hook, naming every claiming base.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HookSpec:
    """Shape of an overridable inherited function.

    ``delegate`` is the ancestor the combined override forwards to:
    ``"super"`` walks the linearised inheritance chain, a contract name pins
    one ancestor (needed when two ancestors implement the hook with the same
    arity and only one of them must win).
    """

    name: str
    params: tuple[str, ...]
    args: tuple[str, ...]
    visibility: str = "internal"
    mutability: str = ""
    returns: str = ""
    delegate: str = "super"


@dataclass(frozen=True)
class HookClaim:
    """A feature's request to override *hook* on behalf of *bases*."""

    hook: str
    bases: tuple[str, ...]
    modifiers: tuple[str, ...] = ()


@dataclass(frozen=True)
class HookOverride:
    """The merged result for one hook: every base and modifier, once."""

    spec: HookSpec
    bases: tuple[str, ...]
    modifiers: tuple[str, ...]

    def render(self) -> str:
        spec = self.spec
        if len(self.bases) > 1:
            override = f"override({', '.join(self.bases)})"
        else:
            override = "override"

        lines = [f"    function {spec.name}({', '.join(spec.params)})"]
        lines.append(f"        {spec.visibility}")
        if spec.mutability:
            lines.append(f"        {spec.mutability}")
        lines.append(f"        {override}")
        for modifier in self.modifiers:
            lines.append(f"        {modifier}")
        if spec.returns:
            lines.append(f"        returns ({spec.returns})")
        lines.append("    {")
        call = f"{spec.delegate}.{spec.name}({', '.join(spec.args)});"
        lines.append(f"        {'return ' if spec.returns else ''}{call}")
        lines.append("    }")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Fragments
# ---------------------------------------------------------------------------


@dataclass
class Fragment:
    """What one feature contributes to the contract."""

    imports: list[str] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    bases: list[str] = field(default_factory=list)
    state_vars: list[str] = field(default_factory=list)
    ctor_args: list[str] = field(default_factory=list)
    ctor_body: list[str] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    claims: list[HookClaim] = field(default_factory=list)


@dataclass
class ContractPlan:
    """All fragments merged, ready for rendering."""

    imports: list[str] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    bases: list[str] = field(default_factory=list)
    state_vars: list[str] = field(default_factory=list)
    ctor_args: list[str] = field(default_factory=list)
    ctor_body: list[str] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    overrides: list[HookOverride] = field(default_factory=list)

    @property
    def all_functions(self) -> list[str]:
        """Standalone functions followed by the combined hook overrides."""
        return self.functions + [o.render() for o in self.overrides]


def _append_unique(target: list[str], items: list[str] | tuple[str, ...]) -> None:
    for item in items:
        if item not in target:
            target.append(item)


def merge(fragments: list[Fragment], hooks: dict[str, HookSpec]) -> ContractPlan:
    """Merge *fragments* in order and resolve hook claims.

    Imports, interfaces and bases are deduplicated keeping the first
    occurrence.  State variables, constructor pieces and functions are
    concatenated in order.  Claims are grouped per hook; overrides are
    emitted in the declaration order of *hooks*, so the output does not
    depend on which feature happened to claim a hook first.

    Raises:
        KeyError: If a claim names a hook missing from *hooks*.
    """
    plan = ContractPlan()
    grouped: dict[str, tuple[list[str], list[str]]] = {}

    for fragment in fragments:
        _append_unique(plan.imports, fragment.imports)
        _append_unique(plan.interfaces, fragment.interfaces)
        _append_unique(plan.bases, fragment.bases)
        plan.state_vars.extend(fragment.state_vars)
        plan.ctor_args.extend(fragment.ctor_args)
        plan.ctor_body.extend(fragment.ctor_body)
        plan.functions.extend(fragment.functions)

        for claim in fragment.claims:
            if claim.hook not in hooks:
                raise KeyError(f"No hook named {claim.hook!r} for this contract family")
            bases, modifiers = grouped.setdefault(claim.hook, ([], []))
            _append_unique(bases, claim.bases)
            _append_unique(modifiers, claim.modifiers)

    for hook_name, spec in hooks.items():
        if hook_name not in grouped:
            continue
        bases, modifiers = grouped[hook_name]
        plan.overrides.append(
            HookOverride(spec=spec, bases=tuple(bases), modifiers=tuple(modifiers))
        )

    return plan
