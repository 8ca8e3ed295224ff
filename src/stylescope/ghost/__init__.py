from stylescope.ghost.detector import defined_classes, detect_ghost_classes
from stylescope.ghost.patterns import UTILITY_PATTERNS, is_utility_class

__all__ = ["UTILITY_PATTERNS", "defined_classes", "detect_ghost_classes", "is_utility_class"]
