"""Header rules bundled with headerlint, plus loading of third-party rules.

Extra rules are published under the ``headerlint.rules`` entry point group.
An entry point may name a :class:`Rule` instance, a :class:`Rule` subclass
or a callable that takes a :class:`RuleContext` and returns a rule.
"""

from __future__ import annotations

from functools import partial
from importlib import metadata
from typing import Callable, Dict, Iterable, Iterator, List, Sequence, Tuple

from .base import Rule, RuleContext
from .file_level_docblock import FileLevelDocBlockRule

RuleFactory = Callable[[RuleContext], Rule]

ENTRY_POINT_GROUP = "headerlint.rules"

BUILTIN_RULES: Dict[str, RuleFactory] = {
    "file-level-docblock": FileLevelDocBlockRule.from_context,
}


def discover_rules(context: RuleContext, enabled: Sequence[str] | None = None) -> List[Rule]:
    """Build the rules to run, bundled ones first.

    Names compare case-insensitively and the first rule registered under a
    name wins. ``enabled`` restricts the result; naming a rule that nobody
    provides raises ``ValueError``.
    """
    wanted = None if enabled is None else {name.lower() for name in enabled}
    built: Dict[str, Rule] = {}

    for name, factory in _candidates():
        key = name.lower()
        if key in built or (wanted is not None and key not in wanted):
            continue
        rule = factory(context)
        if not isinstance(rule, Rule):
            raise TypeError(f"Rule factory for '{name}' did not return a Rule instance")
        built[key] = rule

    if wanted is not None:
        unknown = sorted(wanted - built.keys())
        if unknown:
            raise ValueError(f"Unknown rules requested: {', '.join(unknown)}")

    return list(built.values())


def _candidates() -> Iterator[Tuple[str, RuleFactory]]:
    yield from BUILTIN_RULES.items()
    for entry in _iter_entry_points():
        try:
            target = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load rule entry point '{entry.name}': {exc}") from exc
        yield entry.name, partial(_coerce_rule, target)


def _coerce_rule(target: object, context: RuleContext) -> Rule:
    if isinstance(target, Rule):
        return target
    if isinstance(target, type) and issubclass(target, Rule):
        if hasattr(target, "from_context"):
            return target.from_context(context)
        return target()
    if callable(target):
        return target(context)
    raise TypeError("Rule entry point must be a Rule subclass or a factory taking a RuleContext")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=ENTRY_POINT_GROUP)


__all__ = [
    "BUILTIN_RULES",
    "ENTRY_POINT_GROUP",
    "FileLevelDocBlockRule",
    "Rule",
    "RuleContext",
    "discover_rules",
]
