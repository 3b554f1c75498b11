"""
Exceptions raised by groundnet.

Unknown atom or constraint ids on a network are not errors: they resolve
to the NO_ATOM / NO_CONSTRAINT sentinels and callers check for those.
"""


class GroundNetError(Exception):
    """Base class for every error raised by this package."""


class MalformedStructureError(GroundNetError, ValueError):
    """A value could not be built because its structure is invalid."""


class ParseError(MalformedStructureError):
    """Text that does not follow the atom / clause rendering."""

    def __init__(self, message: str, text: str = "", position: int = -1):
        self.text = text
        self.position = position
        if text and position >= 0:
            message = f"{message} at position {position} in {text!r}"
        elif text:
            message = f"{message} in {text!r}"
        super().__init__(message)


class MissingDependencyMapError(GroundNetError, LookupError):
    """Weight reconstruction on a network grounded without dependency tracking."""
