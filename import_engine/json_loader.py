"""
import_engine.json_loader - Pasted JSON import.

Accepts one object or an array of objects.  Keys go through the same
field mapping as CSV headers ("sectorBarrio" → sector_or_neighborhood),
values are stringified and stripped of characters outside letters,
digits, whitespace and . , ; : -
"""

from __future__ import annotations

import json
import re

from import_engine.errors import FormatError
from import_engine.field_map import map_field

_UNWANTED = re.compile(r"[^\w\s.,;:áéíóúÁÉÍÓÚñÑüÜ-]")


def clean_value(value) -> str:
    if value is None or value == "":
        return ""
    return _UNWANTED.sub("", str(value))


def load_json_records(text: str) -> list[dict[str, str]]:
    if not text or not text.strip():
        raise FormatError("empty or no valid lines")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"invalid JSON: {exc.msg} (line {exc.lineno})") from exc

    items = data if isinstance(data, list) else [data]
    records = []
    for item in items:
        if not isinstance(item, dict):
            raise FormatError("JSON must be an object or an array of objects")
        records.append({
            map_field(str(k).strip().lower()): clean_value(v)
            for k, v in item.items()
        })

    if not records:
        raise FormatError("no records could be extracted")
    return records
