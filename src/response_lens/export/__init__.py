"""Export subpackage: JSON / CSV / XML byte streams.

Example::

    from response_lens.export import Exporter
    from response_lens.config import ExportFormat

    data = Exporter().export(value, ExportFormat.XML, root_name="users")
"""

from __future__ import annotations

from response_lens.export.exporter import Exportable, Exporter
from response_lens.export.writers import CsvWriter, JsonWriter, XmlWriter, xml_name

__all__ = ["CsvWriter", "Exportable", "Exporter", "JsonWriter", "XmlWriter", "xml_name"]
