from stylescope.matching.matcher import TargetMatcher, css_escape, match_selector
from stylescope.matching.shadow import ShadowMatchResult, match_shadow

__all__ = [
    "ShadowMatchResult",
    "TargetMatcher",
    "css_escape",
    "match_selector",
    "match_shadow",
]
