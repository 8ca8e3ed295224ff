"""Cascade resolution: pick the declaration that renders for each property.

Total order, highest first:

1. ``!important`` declarations over normal ones
2. Higher specificity
3. Later stylesheet in the page's load order
4. Later rule in the same stylesheet, then later declaration in the rule

Origins and ``@layer`` order are not modelled; layers only show up as
context text on each match.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from stylescope.model.cascade import CascadeDecision, Declaration
from stylescope.model.match import Match
from stylescope.model.rule import SourceRule
from stylescope.stylesheet.parser import parse_declarations

__all__ = ["analyze_conflicts", "collect_declarations", "file_ranks", "resolve_conflicts"]


def file_ranks(names: Iterable[str], link_order: Sequence[str] = ()) -> dict[str, int]:
    """Rank stylesheets by load order.

    Linked stylesheets come first, in link order; any other stylesheet
    ranks after all of them, in the order it is first seen in *names*.
    """
    ranks: dict[str, int] = {}
    for name in link_order:
        ranks.setdefault(name, len(ranks))
    for name in names:
        ranks.setdefault(name, len(ranks))
    return ranks


def _rule_declarations(body: str) -> dict[str, tuple[str, bool, int]]:
    """Collapse a rule body to one declaration per property.

    A later duplicate replaces an earlier one unless only the earlier one
    is ``!important``.
    """
    seen: dict[str, tuple[str, bool, int]] = {}
    for index, (prop, value, important) in enumerate(parse_declarations(body)):
        previous = seen.get(prop)
        if previous is not None and previous[1] and not important:
            continue
        seen[prop] = (value, important, index)
    return seen


def _best_match_per_rule(matches: Iterable[Match]) -> list[Match]:
    # One rule fanned out into several matching selectors still declares
    # each property once, with the most specific of its selectors.
    best: dict[SourceRule, Match] = {}
    for match in matches:
        current = best.get(match.rule)
        if current is None or match.specificity > current.specificity:
            best[match.rule] = match
    return list(best.values())


def collect_declarations(
    matches: Iterable[Match], link_order: Sequence[str] = ()
) -> dict[str, list[Declaration]]:
    """Group the declarations of every matched rule by property name.

    Properties appear in the order they are first declared.
    """
    selected = _best_match_per_rule(matches)
    ranks = file_ranks((m.source for m in selected), link_order)
    by_property: dict[str, list[Declaration]] = {}
    for match in selected:
        for prop, (value, important, index) in _rule_declarations(match.rule.body).items():
            by_property.setdefault(prop, []).append(
                Declaration(
                    property=prop,
                    value=value,
                    important=important,
                    match=match,
                    file_rank=ranks[match.source],
                    rule_order=match.rule.order,
                    index=index,
                )
            )
    return by_property


def resolve_conflicts(
    candidates_by_property: Mapping[str, Sequence[Declaration]],
) -> dict[str, CascadeDecision]:
    """Return a decision for every property declared by two or more rules."""
    decisions: dict[str, CascadeDecision] = {}
    for prop, candidates in candidates_by_property.items():
        if len(candidates) < 2:
            continue
        ranked = sorted(candidates, key=Declaration.rank_key, reverse=True)
        decisions[prop] = CascadeDecision(
            property=prop, winner=ranked[0], losers=tuple(ranked[1:])
        )
    return decisions


def analyze_conflicts(
    matches: Iterable[Match], link_order: Sequence[str] = ()
) -> dict[str, CascadeDecision]:
    return resolve_conflicts(collect_declarations(matches, link_order))
