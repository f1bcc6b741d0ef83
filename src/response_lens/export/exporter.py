"""Exporter: writes a Value, Stats or Schema to JSON, CSV or XML bytes.

Stats and Schema sources are exported through their wire form
(``to_dict()``), so every format handles them like any other Value.  The
exporter never mutates its source.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping
from typing import Any

from response_lens.analysis.schema import OneOf, Schema
from response_lens.analysis.stats import Stats
from response_lens.config import ExportFormat
from response_lens.errors import SerializationFailure
from response_lens.export.writers import CsvWriter, JsonWriter, XmlWriter
from response_lens.protocols import FormatWriter
from response_lens.tree.value import Value, ingest

logger = logging.getLogger(__name__)

__all__ = ["Exportable", "Exporter"]

Exportable = Value | Stats | Schema | OneOf


class Exporter:
    """Serialises export sources with a set of format writers.

    Args:
        root_name: Root element name used by the XML writer.
        writers:   Extra or replacement writers keyed by format name.  Each
            must satisfy the ``FormatWriter`` protocol.

    Example::

        exporter = Exporter(root_name="users")
        data = exporter.export(ingest('[{"a": 1}]'), ExportFormat.CSV)
        # b'"a"\\r\\n"1"\\r\\n'
    """

    def __init__(
        self,
        root_name: str = "response",
        writers: Mapping[str, FormatWriter] | None = None,
    ) -> None:
        self._writers: dict[str, Any] = {
            ExportFormat.JSON: JsonWriter(),
            ExportFormat.CSV: CsvWriter(),
            ExportFormat.XML: XmlWriter(root_name),
        }
        for name, writer in (writers or {}).items():
            if not isinstance(writer, FormatWriter):
                msg = f"writer for {name!r} does not satisfy FormatWriter"
                raise TypeError(msg)
            self._writers[str(name).lower()] = writer

    @property
    def formats(self) -> list[str]:
        return sorted(str(name) for name in self._writers)

    def writer(self, fmt: ExportFormat | str) -> FormatWriter:
        """Return the writer registered for ``fmt``.

        Raises:
            ValueError: If no writer handles ``fmt``.
        """
        try:
            return self._writers[str(fmt).lower()]
        except KeyError:
            msg = f"unsupported export format {fmt!r}; expected one of {self.formats}"
            raise ValueError(msg) from None

    def export(
        self,
        source: Exportable,
        fmt: ExportFormat | str,
        root_name: str | None = None,
    ) -> bytes:
        """Serialise ``source`` in format ``fmt``.

        ``root_name`` overrides the XML root element name for this call.

        Raises:
            ValueError: Unknown format.
            TypeError: ``source`` is not a Value, Stats or Schema.
            SerializationFailure: The source cannot be serialised, including
                ``CyclicStructureError`` for reference cycles.
        """
        writer = self.writer(fmt)
        if root_name is not None and isinstance(writer, XmlWriter):
            writer = XmlWriter(root_name)
        value = self._as_value(source)
        try:
            data = writer.write(value)
        except UnicodeEncodeError as exc:
            msg = f"text is not encodable: {exc.reason}"
            raise SerializationFailure(msg) from exc
        logger.debug("exported %s as %s (%d bytes)", value.type_label, fmt, len(data))
        return data

    def media_type(self, fmt: ExportFormat | str) -> str:
        return self.writer(fmt).media_type

    def suggested_filename(
        self, fmt: ExportFormat | str, on: dt.date | None = None
    ) -> str:
        """``api-response-YYYY-MM-DD.<ext>`` for a download of ``fmt``."""
        day = on if on is not None else dt.date.today()
        return f"api-response-{day.isoformat()}.{self.writer(fmt).extension}"

    @staticmethod
    def _as_value(source: Exportable) -> Value:
        if isinstance(source, Value):
            return source
        to_dict = getattr(source, "to_dict", None)
        if callable(to_dict):
            return ingest(to_dict())
        msg = f"cannot export {type(source).__name__}"
        raise TypeError(msg)
