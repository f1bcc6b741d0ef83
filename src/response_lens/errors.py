"""Exception hierarchy for response-lens.

Every error raised by the engine derives from ``ResponseLensError`` so a
hosting session can catch the whole family at the call site that issued the
operation (load, drill, view switch, export) without aborting itself.

- ParseError:            malformed input at ingestion.
- PayloadTooLargeError:  ingestion node ceiling exceeded.
- PayloadTooDeepError:   ingestion nesting ceiling exceeded.
- PathNotFoundError:     drill-down target missing from the current root.
- NotTabularError:       table projection requested on a non-tabular root.
- SerializationFailure:  a value could not be serialised or walked.
- CyclicStructureError:  a reference cycle was found during traversal.
"""

from __future__ import annotations

__all__ = [
    "CyclicStructureError",
    "NotTabularError",
    "ParseError",
    "PathNotFoundError",
    "PayloadTooDeepError",
    "PayloadTooLargeError",
    "ResponseLensError",
    "SerializationFailure",
]


class ResponseLensError(Exception):
    """Base class for all response-lens errors."""


class ParseError(ResponseLensError, ValueError):
    """Input could not be turned into a Value.

    Attributes:
        reason: Human-readable description of what went wrong.
        offset: Character offset into the source text, when known.
        line:   1-based line number, when known.
        column: 1-based column number, when known.
    """

    def __init__(
        self,
        reason: str,
        offset: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.reason = reason
        self.offset = offset
        self.line = line
        self.column = column
        if offset is None:
            message = reason
        else:
            message = f"{reason} (offset {offset}, line {line}, column {column})"
        super().__init__(message)


class PayloadTooLargeError(ParseError):
    """The payload holds more nodes than the configured ``max_nodes``."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"payload exceeds the node limit of {limit}")


class PayloadTooDeepError(ParseError):
    """The payload nests deeper than the configured ``max_nesting_depth``."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"payload exceeds the nesting limit of {limit}")


class PathNotFoundError(ResponseLensError, LookupError):
    """A path did not resolve against the current root."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"path not found: {str(path) or '<root>'}")


class NotTabularError(ResponseLensError):
    """The root is neither an Object nor an Array of Objects."""


class SerializationFailure(ResponseLensError):
    """A value could not be serialised to the requested format."""


class CyclicStructureError(SerializationFailure):
    """A container was reached twice on the same traversal branch."""
