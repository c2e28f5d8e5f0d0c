"""
import_engine.row_processor - Validate and normalise one built record.

Single-responsibility: given a mapping produced by the record builder
or the JSON loader, either return a complete member document ready for
the store, or raise PersistenceError.
"""

from __future__ import annotations

from import_engine.errors import PersistenceError
from import_engine.field_map import IDENTITY_FIELDS, empty_record


class RowProcessor:

    @staticmethod
    def process(record: dict) -> dict[str, str]:
        """
        Return a copy of *record* with every canonical field present
        (absent ones as ""), all values as trimmed strings.
        Raises PersistenceError when name, surname and national_id are
        all empty.
        """
        doc = empty_record()
        for key, value in record.items():
            if not key:
                continue
            doc[key] = "" if value is None else str(value).strip()

        if not any(doc[f] for f in IDENTITY_FIELDS):
            raise PersistenceError("record has no name, surname or national ID")
        return doc
