"""Error hierarchy for stylescope."""

from __future__ import annotations


class StylescopeError(Exception):
    """Base error for all stylescope errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StylesheetParseError(StylescopeError):
    """Raised when CSS/SCSS source cannot be split into rules."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class TargetNotFoundError(StylescopeError):
    """Raised when the target selector matches no element in the HTML."""

    def __init__(self, selector: str, suggestions: list[str] | None = None) -> None:
        self.selector = selector
        self.suggestions = list(suggestions or [])
        message = f"No element matches selector {selector!r}"
        if self.suggestions:
            message += ". Did you mean: " + ", ".join(self.suggestions)
        super().__init__(message)


class SourceFetchError(StylescopeError):
    """Raised when an HTML or stylesheet source cannot be read or fetched."""

    def __init__(
        self,
        message: str,
        *,
        location: str = "",
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.location = location
        self.status_code = status_code
