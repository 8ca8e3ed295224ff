"""TargetIdentity: what the analyzed element looks like to a stylesheet."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


def _unique(values: Iterable[str] | str | None) -> tuple[str, ...]:
    if isinstance(values, str):
        values = values.split()
    seen: dict[str, None] = {}
    for value in values or ():
        value = str(value).strip()
        if value:
            seen.setdefault(value, None)
    return tuple(seen)


@dataclass(frozen=True)
class TargetIdentity:
    """Identifiers gathered from one selected element and its descendants.

    Every collection is de-duplicated on construction; the tag name is
    lower-cased. Instances are hashable so they can key a cache.
    """

    classes: tuple[str, ...] = ()
    ids: tuple[str, ...] = ()
    tag_name: str = ""
    data_attributes: tuple[str, ...] = ()  # names with their "data-" prefix
    shadow_parts: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "classes", _unique(self.classes))
        object.__setattr__(self, "ids", _unique(self.ids))
        object.__setattr__(self, "tag_name", (self.tag_name or "").strip().lower())
        object.__setattr__(self, "data_attributes", _unique(self.data_attributes))
        object.__setattr__(self, "shadow_parts", _unique(self.shadow_parts))

    @property
    def has_selectors(self) -> bool:
        """True if the element carries at least one class or id."""
        return bool(self.classes or self.ids)

    @property
    def summary(self) -> str:
        """Short opening-tag rendering, e.g. ``<nav class="menu dark" id="top">``."""
        parts = [f"<{self.tag_name or '?'}"]
        if self.classes:
            shown = " ".join(self.classes[:3])
            more = "..." if len(self.classes) > 3 else ""
            parts.append(f' class="{shown}{more}"')
        if self.ids:
            parts.append(f' id="{self.ids[0]}"')
        parts.append(">")
        return "".join(parts)

    def to_dict(self) -> dict[str, object]:
        return {
            "tag_name": self.tag_name,
            "classes": list(self.classes),
            "ids": list(self.ids),
            "data_attributes": list(self.data_attributes),
            "shadow_parts": list(self.shadow_parts),
        }
