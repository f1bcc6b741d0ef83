"""Format writers: Value -> UTF-8 bytes for JSON, CSV and XML.

Each writer satisfies the ``FormatWriter`` protocol structurally.

- JsonWriter: 2-space indent, key order preserved, non-ASCII kept verbatim.
- CsvWriter:  every field double-quoted, embedded quotes doubled, one header
  row.  An Array of Objects becomes one row per element with the key union
  as header; nested Arrays/Objects are inlined as compact JSON (lossy by
  design: nothing is flattened into extra columns).  A single Object
  becomes ``Key, Value, Type`` rows.  Other arrays use a single ``value``
  column; a primitive root is one ``value`` row.
- XmlWriter:  elements only, no attributes.  Object members become child
  elements named after their key; array items become siblings named
  ``{parentTag}_{index}``.  Nulls are empty elements.
"""

from __future__ import annotations

import csv
import io
import json
import re
import xml.etree.ElementTree as ET

from response_lens.errors import SerializationFailure
from response_lens.tree.value import CycleGuard, Value, ValueKind

__all__ = ["CsvWriter", "JsonWriter", "XmlWriter", "xml_name"]

XML_PROLOGUE = '<?xml version="1.0" encoding="UTF-8"?>'

# Characters that may not start / appear in an XML element name
_XML_NAME_BAD = re.compile(r"[^\w.\-]", re.UNICODE)
_XML_NAME_START = re.compile(r"[^\W\d]", re.UNICODE)

# Characters outside the XML 1.0 Char production
_XML_BAD_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _inline_json(value: Value) -> str:
    try:
        return json.dumps(
            value.to_python(),
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        )
    except ValueError as exc:
        raise SerializationFailure(str(exc)) from exc


class JsonWriter:
    media_type = "application/json"
    extension = "json"

    def write(self, value: Value) -> bytes:
        """Serialise ``value`` as indented JSON.

        Raises:
            SerializationFailure: If the value cannot be serialised.
        """
        try:
            text = json.dumps(
                value.to_python(), indent=2, ensure_ascii=False, allow_nan=False
            )
        except ValueError as exc:
            raise SerializationFailure(str(exc)) from exc
        return text.encode("utf-8")


class CsvWriter:
    media_type = "text/csv"
    extension = "csv"

    def write(self, value: Value) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL)
        for row in self._rows(value):
            writer.writerow(row)
        return buffer.getvalue().encode("utf-8")

    def _cell(self, value: Value) -> str:
        if value.is_container:
            return _inline_json(value)
        if value.kind is ValueKind.NULL:
            return ""
        return value.display()

    def _rows(self, value: Value) -> list[list[str]]:
        match value.kind:
            case ValueKind.ARRAY if not value.data:
                return []
            case ValueKind.ARRAY if all(
                item.kind is ValueKind.OBJECT for item in value.data
            ):
                header: dict[str, None] = {}
                for item in value.data:
                    header.update(dict.fromkeys(item.data))
                rows = [list(header)]
                for item in value.data:
                    rows.append(
                        [
                            self._cell(item.data[key]) if key in item.data else ""
                            for key in header
                        ]
                    )
                return rows
            case ValueKind.ARRAY:
                return [["value"]] + [[self._cell(item)] for item in value.data]
            case ValueKind.OBJECT:
                rows = [["Key", "Value", "Type"]]
                for key, member in value.data.items():
                    rows.append([key, self._cell(member), str(member.kind)])
                return rows
            case _:
                return [["value"], [self._cell(value)]]


def xml_name(text: str) -> str:
    """Turn an arbitrary key into a valid XML element name."""
    name = _XML_NAME_BAD.sub("_", text)
    if not name or not _XML_NAME_START.match(name[0]):
        name = f"_{name}"
    return name


class XmlWriter:
    media_type = "application/xml"
    extension = "xml"

    def __init__(self, root_name: str = "response") -> None:
        self.root_name = root_name

    def write(self, value: Value, root_name: str | None = None) -> bytes:
        """Serialise ``value`` under a root element.

        Raises:
            CyclicStructureError: If ``value`` refers back to an ancestor.
        """
        tag = xml_name(root_name or self.root_name)
        root = self._element(tag, value, CycleGuard())
        ET.indent(root, space="  ")
        body = ET.tostring(root, encoding="unicode")
        return f"{XML_PROLOGUE}\n{body}\n".encode()

    def _element(self, tag: str, node: Value, guard: CycleGuard) -> ET.Element:
        element = ET.Element(tag)
        match node.kind:
            case ValueKind.OBJECT:
                with guard.enter(node):
                    for key, member in node.data.items():
                        element.append(self._element(xml_name(key), member, guard))
            case ValueKind.ARRAY:
                with guard.enter(node):
                    for index, item in enumerate(node.data):
                        element.append(self._element(f"{tag}_{index}", item, guard))
            case ValueKind.NULL:
                pass
            case _:
                element.text = _XML_BAD_CHARS.sub("\ufffd", node.display())
        return element
