"""FormatWriter Protocol: the exporter's extension point.

Any class with a conformant ``write`` method and ``media_type`` /
``extension`` attributes passes ``isinstance`` checks; no inheritance
required.

Example::

    from response_lens.protocols import FormatWriter

    class NdjsonWriter:
        media_type = "application/x-ndjson"
        extension = "ndjson"

        def write(self, value: Value) -> bytes:
            ...

    assert isinstance(NdjsonWriter(), FormatWriter)  # True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from response_lens.tree.value import Value


@runtime_checkable
class FormatWriter(Protocol):
    """Structural protocol for export writers.

    ``write`` must return the complete UTF-8 encoded document for ``value``
    and must not mutate it.
    """

    media_type: str
    extension: str

    def write(self, value: Value) -> bytes: ...
