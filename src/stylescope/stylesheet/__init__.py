from stylescope.stylesheet.format import detect_minified, format_css
from stylescope.stylesheet.model import RawDeclaration, Stylesheet
from stylescope.stylesheet.parser import parse_declarations, parse_stylesheet, syntax_for

__all__ = [
    "RawDeclaration",
    "Stylesheet",
    "detect_minified",
    "format_css",
    "parse_declarations",
    "parse_stylesheet",
    "syntax_for",
]
