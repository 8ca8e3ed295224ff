"""Naming conventions for classes that are not expected to have project CSS.

Utility frameworks, JavaScript state hooks, CSS Modules, CSS-in-JS, icon
fonts and animation libraries all produce classes whose rules live outside
the project sources (or nowhere). A class matching one of these is never
reported as a ghost. Conventions missing from this table will be flagged.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

__all__ = ["UTILITY_PATTERNS", "compile_patterns", "is_utility_class"]

_SOURCES = [
    # Tailwind-style spacing, typography and colour utilities
    r"^-?(p|m)[xytrblse]?-\d+",
    r"^text-(xs|sm|base|lg|xl|\d+xl)",
    r"^text-(black|white|gray|red|blue|green|yellow|indigo|purple|pink)",
    r"^bg-(black|white|gray|red|blue|green|yellow|indigo|purple|pink)",
    r"^font-(sans|serif|mono|bold|medium|light)",
    # Layout
    r"^flex", r"^grid", r"^block", r"^hidden", r"^inline",
    # Sizing
    r"^w-\d+", r"^h-\d+", r"^w-full", r"^h-full", r"^min-w", r"^max-w",
    # Decoration
    r"^border", r"^rounded", r"^shadow",
    # Flex/grid alignment
    r"^items-", r"^justify-", r"^place-", r"^gap-",
    # Position
    r"^absolute", r"^relative", r"^fixed", r"^sticky",
    r"^top-", r"^bottom-", r"^left-", r"^right-", r"^z-",
    # Interaction and transitions
    r"^opacity-", r"^cursor-", r"^pointer-events-",
    r"^transition", r"^duration-", r"^ease-",
    # Variant prefixes
    r"^hover:", r"^focus:", r"^active:", r"^group-hover:",
    r"^sm:", r"^md:", r"^lg:", r"^xl:", r"^2xl:",
    # Bootstrap
    r"^col-", r"^row", r"^container", r"^btn-", r"^alert-", r"^card-",
    r"^navbar-", r"^nav-", r"^dropdown-", r"^modal-", r"^tab-", r"^form-",
    # Icon fonts
    r"^fa-", r"^fa[srlbdk]?$", r"^icon-", r"^material-", r"^bi-", r"^ri-", r"^bx-",
    r"^glyphicon",
    # State and JavaScript hooks
    r"^js-", r"^is-", r"^has-", r"^active", r"^open", r"^show", r"^visible",
    # Animation libraries
    r"^animate__", r"^animated$", r"^aos-", r"^fade", r"^slide", r"^zoom",
    # Helper namespaces
    r"^u-", r"^util-", r"^helper-",
    # CSS Modules: [name]_[local]_[hash] and [name]__[local]___[hash]
    r"^[A-Za-z][A-Za-z0-9-]*_{1,2}[A-Za-z0-9-]+_{1,3}(?=[A-Za-z-]*\d)[A-Za-z0-9-]{5,}$",
    # CSS-in-JS generated names
    r"^css-[a-z0-9]{4,}", r"^sc-[A-Za-z]", r"^jsx-\d+", r"^emotion-", r"^styled-",
    r"^makeStyles-", r"^Mui[A-Z]", r"^chakra-", r"^svelte-[a-z0-9]+$",
]

UTILITY_PATTERNS: tuple[re.Pattern[str], ...] = tuple(re.compile(s) for s in _SOURCES)


def compile_patterns(patterns: Iterable[str | re.Pattern[str]]) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p) if isinstance(p, str) else p for p in patterns)


def is_utility_class(
    name: str, extra_patterns: Iterable[re.Pattern[str]] = ()
) -> bool:
    """True if *name* follows a known utility/state/framework convention."""
    name = name[1:] if name.startswith(".") else name
    return any(p.search(name) for p in (*UTILITY_PATTERNS, *extra_patterns))
