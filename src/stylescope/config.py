from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    """Knobs for one analysis run."""

    use_cache: bool = True
    cache_size: int = 50
    workers: int = 1  # >1 analyzes stylesheets on a thread pool
    fan_out_warning: int = 8  # nested selector variants before warning
    include_shadow: bool = True
    skip_minified: bool = False  # *.min.* files and minified sources
    extra_utility_patterns: tuple[str, ...] = ()  # regexes never reported as ghosts

    @property
    def file_settings(self) -> tuple[bool, int, bool]:
        """The settings a single stylesheet's result depends on."""
        return (self.include_shadow, self.fan_out_warning, self.skip_minified)
