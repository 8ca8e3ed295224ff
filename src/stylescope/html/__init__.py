from stylescope.html.document import (
    inline_style_name,
    inline_styles,
    stylesheet_links,
    stylesheet_order,
)
from stylescope.html.target import (
    extract_target,
    identity_from_element,
    normalize_selector,
    parse_html,
    parse_line_range,
)

__all__ = [
    "extract_target",
    "identity_from_element",
    "inline_style_name",
    "inline_styles",
    "normalize_selector",
    "parse_html",
    "parse_line_range",
    "stylesheet_links",
    "stylesheet_order",
]
