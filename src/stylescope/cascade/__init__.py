from stylescope.cascade.engine import (
    analyze_conflicts,
    collect_declarations,
    file_ranks,
    resolve_conflicts,
)

__all__ = ["analyze_conflicts", "collect_declarations", "file_ranks", "resolve_conflicts"]
