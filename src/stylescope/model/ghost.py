"""GhostClassReport: classes in markup with no rule anywhere in the project."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GhostClassReport:
    ghost_classes: tuple[str, ...] = ()
    defined_classes: tuple[str, ...] = ()
    total_classes: int = 0

    @property
    def has_ghosts(self) -> bool:
        return len(self.ghost_classes) > 0

    def to_dict(self) -> dict[str, object]:
        return {
            "ghost_classes": list(self.ghost_classes),
            "defined_classes": list(self.defined_classes),
            "total_classes": self.total_classes,
            "has_ghosts": self.has_ghosts,
        }
