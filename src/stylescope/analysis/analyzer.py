"""Per-stylesheet analysis and the project-wide pass built on top of it."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from stylescope.analysis.cache import AnalysisCache
from stylescope.analysis.report import AnalysisReport, FileAnalysis
from stylescope.analysis.variables import collect_variables
from stylescope.cascade.engine import collect_declarations, resolve_conflicts
from stylescope.config import AnalysisConfig
from stylescope.errors import StylesheetParseError
from stylescope.ghost.detector import detect_ghost_classes
from stylescope.matching.matcher import TargetMatcher
from stylescope.matching.shadow import match_shadow
from stylescope.model.diagnostic import Diagnostic, Severity
from stylescope.model.identity import TargetIdentity
from stylescope.model.match import Match, ShadowMatch
from stylescope.model.rule import AtRuleBlock
from stylescope.model.specificity import SpecificityVector
from stylescope.selectors.resolver import SelectorResolver
from stylescope.selectors.specificity import calculate_specificity
from stylescope.sources import StylesheetSource
from stylescope.stylesheet.format import detect_minified
from stylescope.stylesheet.model import Stylesheet
from stylescope.stylesheet.parser import parse_stylesheet

__all__ = ["StylesheetAnalyzer", "analyze_project"]

log = logging.getLogger(__name__)

_MIN_NAME_RE = re.compile(r"\.min\.(?:css|scss|less)$", re.IGNORECASE)


def _name_regex(name: str) -> re.Pattern[str]:
    return re.compile(r"(?<![-\w])" + re.escape(name) + r"(?![-\w])")


def _used_blocks(
    blocks: Iterable[AtRuleBlock], bodies: Sequence[str]
) -> list[AtRuleBlock]:
    used = []
    for block in blocks:
        name = block.params.strip().strip("\"'")
        if not name:
            continue
        regex = _name_regex(name)
        if any(regex.search(body) for body in bodies):
            used.append(block)
    return used


class StylesheetAnalyzer:
    """Finds the rules of one stylesheet that can style a target.

    The analyzer is stateless between calls apart from the optional shared
    cache, so one instance may serve several worker threads.
    """

    def __init__(
        self,
        identity: TargetIdentity,
        config: AnalysisConfig | None = None,
        cache: AnalysisCache | None = None,
    ) -> None:
        self.identity = identity
        self.config = config or AnalysisConfig()
        self.cache = cache if self.config.use_cache else None
        self.matcher = TargetMatcher(identity)

    def analyze(self, source: StylesheetSource) -> FileAnalysis:
        """Analyze *source*, serving a cached result when one exists.

        Never raises for bad stylesheet text; parse failures are reported
        on the returned :class:`FileAnalysis`.
        """
        key = None
        if self.cache is not None:
            key = AnalysisCache.key(source, self.identity, self.config)
            cached = self.cache.get(key)
            if cached is not None:
                log.debug("Cache hit for %s", source.name)
                return cached

        result = self._analyze(source)
        if key is not None:
            self.cache.put(key, result)
        return result

    def _analyze(self, source: StylesheetSource) -> FileAnalysis:
        if source.syntax == "sass":
            message = "Indented .sass syntax is not supported; file skipped"
            log.warning("%s: %s", source.name, message)
            return FileAnalysis(
                name=source.name,
                syntax=source.syntax,
                error=message,
                diagnostics=[
                    Diagnostic("unsupported_syntax", Severity.WARNING, message, source.name)
                ],
            )
        is_minified = detect_minified(source.text)
        if self.config.skip_minified and (is_minified or _MIN_NAME_RE.search(source.name)):
            log.info("Skipping minified stylesheet %s", source.name)
            return FileAnalysis(
                name=source.name,
                syntax=source.syntax,
                is_minified=True,
                diagnostics=[
                    Diagnostic(
                        "skipped_minified", Severity.INFO, "Minified stylesheet skipped", source.name
                    )
                ],
            )

        try:
            sheet = parse_stylesheet(source.text, name=source.name, syntax=source.syntax)
        except StylesheetParseError as exc:
            log.warning("Could not parse %s: %s", source.name, exc)
            return FileAnalysis(
                name=source.name,
                syntax=source.syntax,
                error=str(exc),
                diagnostics=[
                    Diagnostic("parse_error", Severity.ERROR, str(exc), source.name, exc.line)
                ],
            )
        if sheet.is_empty:
            return FileAnalysis(
                name=source.name,
                syntax=source.syntax,
                diagnostics=[
                    Diagnostic("empty_stylesheet", Severity.INFO, "Stylesheet is empty", source.name)
                ],
            )
        return self.analyze_stylesheet(sheet, is_minified=is_minified)

    def analyze_stylesheet(self, sheet: Stylesheet, is_minified: bool = False) -> FileAnalysis:
        """Match every rule of an already parsed stylesheet."""
        resolver = SelectorResolver(self.config.fan_out_warning)
        matches: list[Match] = []
        shadows: list[ShadowMatch] = []

        for rule in sheet.rules:
            for resolved in resolver.resolve(rule):
                if self.config.include_shadow:
                    shadow = match_shadow(resolved.text, self.identity)
                    if shadow.matches:
                        shadows.append(
                            ShadowMatch(resolved.text, shadow.reasons, shadow.kinds, rule)
                        )
                result = self.matcher.match_resolved(resolved)
                if result.matches:
                    matches.append(
                        Match(
                            selector=resolved.text,
                            reasons=result.reasons,
                            rule=rule,
                            specificity=self.specificity(resolved.text),
                        )
                    )

        diagnostics = [
            Diagnostic(
                "selector_fan_out",
                Severity.WARNING,
                f"Selector {rule.selector!r} expands to {count} variants",
                sheet.name,
                rule.start_line,
            )
            for rule, count in resolver.fan_out_warnings
        ]
        bodies = [m.rule.body for m in matches] + [s.rule.body for s in shadows]
        log.debug("%s: %d matches, %d shadow matches", sheet.name, len(matches), len(shadows))
        return FileAnalysis(
            name=sheet.name,
            syntax=sheet.syntax,
            matches=matches,
            shadow_matches=shadows,
            keyframes=_used_blocks(sheet.keyframes, bodies),
            properties=_used_blocks(sheet.properties, bodies),
            is_minified=is_minified,
            diagnostics=diagnostics,
            stylesheet=sheet,
        )

    def specificity(self, selector: str) -> SpecificityVector:
        """Specificity of the branches of *selector* that match the target.

        A selector list applies with the specificity of its matching branch,
        not of its most specific branch overall.
        """
        branches = self.matcher.matching_branches(selector)
        if not branches:
            return calculate_specificity(selector)
        return max(calculate_specificity(branch) for branch in branches)


def analyze_project(
    identity: TargetIdentity,
    sources: Iterable[StylesheetSource],
    link_order: Sequence[str] = (),
    config: AnalysisConfig | None = None,
    cache: AnalysisCache | None = None,
) -> AnalysisReport:
    """Analyze every source against *identity* and aggregate the results.

    *link_order* lists stylesheet names in the order the document loads
    them; it decides cascade ties between files. With ``config.workers``
    above one, files are analyzed on a thread pool. Results are reported
    in input order either way.
    """
    config = config or AnalysisConfig()
    analyzer = StylesheetAnalyzer(identity, config, cache)
    sources = list(sources)

    if config.workers > 1 and len(sources) > 1:
        files: list[FileAnalysis | None] = [None] * len(sources)
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            futures = {pool.submit(analyzer.analyze, src): i for i, src in enumerate(sources)}
            for future in as_completed(futures):
                files[futures[future]] = future.result()
    else:
        files = [analyzer.analyze(src) for src in sources]

    diagnostics: list[Diagnostic] = []
    if not identity.has_selectors:
        diagnostics.append(
            Diagnostic(
                "no_selectors",
                Severity.WARNING,
                "Target element has no classes or ids; detection may be limited",
            )
        )

    matches = [m for f in files for m in f.matches]
    conflicts = resolve_conflicts(collect_declarations(matches, link_order))
    ghosts = detect_ghost_classes(identity, matches, config.extra_utility_patterns)
    log.info(
        "Analyzed %d stylesheets: %d matches, %d properties in conflict, %d ghost classes",
        len(files),
        len(matches),
        len(conflicts),
        len(ghosts.ghost_classes),
    )
    return AnalysisReport(
        identity=identity,
        files=files,
        conflicts=conflicts,
        ghosts=ghosts,
        variables=collect_variables(files),
        diagnostics=diagnostics,
        link_order=list(link_order),
    )
