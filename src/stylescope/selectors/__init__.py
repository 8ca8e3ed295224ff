from stylescope.selectors.resolver import SelectorResolver, expand_pseudo_classes, resolve_rule
from stylescope.selectors.specificity import (
    calculate_specificity,
    compare_specificity,
    format_specificity,
)

__all__ = [
    "SelectorResolver",
    "calculate_specificity",
    "compare_specificity",
    "expand_pseudo_classes",
    "format_specificity",
    "resolve_rule",
]
