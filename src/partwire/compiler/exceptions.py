"""Compile-time errors raised for unusable fragment sequences."""

from typing import Optional


class TemplateSyntaxError(Exception):
    """Base class for permanent template defects found while compiling."""

    def __init__(
        self,
        message: str,
        fragment_index: Optional[int] = None,
        position: Optional[int] = None,
    ):
        self.message = message
        self.fragment_index = fragment_index
        self.position = position
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.fragment_index is None:
            if self.position is None:
                return self.message
            return f"{self.message} (position {self.position})"
        if self.position is None:
            return f"{self.message} (fragment {self.fragment_index})"
        return (
            f"{self.message} (fragment {self.fragment_index}, "
            f"position {self.position})"
        )


class MalformedMarkupError(TemplateSyntaxError):
    """Raised when the markup cannot carry its placeholders through parsing."""

    pass


class UnterminatedCommentError(TemplateSyntaxError):
    """Raised when a fragment ends inside a comment.

    Placeholders inside comments are not supported: comment text has no
    place for a marker that would survive parsing unchanged.
    """

    pass


class InvalidFragmentsError(TypeError, ValueError):
    """Raised for a fragment sequence that is empty or holds non-strings.

    It is both a TypeError and a ValueError, so callers catching either of
    the built-in errors for bad arguments also catch it.
    """

    pass
