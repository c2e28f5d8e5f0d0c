"""
import_engine.record_builder - Turn raw text into member records.

Three tiers, tried in order:

  1. header      first line is a header (>= 2 non-empty tokens);
                 following lines are paired with it by position.
  2. headerless  the whole input is one line of >= 2 tokens; the tokens
                 are read against DEFAULT_HEADERS.
  3. whitespace  only when 1-2 produced nothing: every line is split on
                 whitespace, first two words are name and surname.

A single line that is itself a header row is read as data by tier 2.
Default headers are never applied to a multi-line file: without a
header line every line goes through tier 3.
"""

from __future__ import annotations

import logging

from import_engine.csv_parser import sniff_delimiter, split_fields, split_lines
from import_engine.errors import FormatError
from import_engine.field_map import DEFAULT_HEADERS, map_field

logger = logging.getLogger(__name__)

TIER_HEADER = "header"
TIER_HEADERLESS = "headerless"
TIER_WHITESPACE = "whitespace"


class RecordBuilder:
    """
    Single-use builder.  After build() the delimiter, header and tier
    attributes describe how the text was read.
    """

    def __init__(self):
        self.delimiter: str = ","
        self.headers: list[str] = []
        self.tier: str | None = None

    def build(self, text: str) -> list[dict[str, str]]:
        """Return records extracted from *text*; raise FormatError if none."""
        lines = split_lines(text)
        self.delimiter = sniff_delimiter(text)
        logger.debug(f"{len(lines)} lines, delimiter {self.delimiter!r}")

        records: list[dict[str, str]] = []
        headers = [h.lower() for h in split_fields(lines[0], self.delimiter)]

        if len(lines) == 1:
            records = self._headerless(lines[0])
            if records:
                self.tier = TIER_HEADERLESS
        elif sum(1 for h in headers if h) >= 2:
            self.headers = headers
            records = self._header_mapped(headers, lines[1:])
            if records:
                self.tier = TIER_HEADER

        if not records:
            logger.info("No records from delimited parsing, trying whitespace split")
            records = self._whitespace(lines)
            if records:
                self.tier = TIER_WHITESPACE

        if not records:
            raise FormatError("no records could be extracted")

        logger.info(f"Extracted {len(records)} records ({self.tier} tier)")
        return records

    # ── Tiers ──────────────────────────────────────────────────────────

    def _header_mapped(self, headers: list[str], lines: list[str]) -> list[dict]:
        fields = [map_field(h) for h in headers]
        records = []
        for line in lines:
            values = split_fields(line, self.delimiter)
            # zip() stops at the shorter side: surplus values are dropped
            record = dict(zip(fields, values))
            if any(v for v in record.values()):
                records.append(record)
        return records

    def _headerless(self, line: str) -> list[dict]:
        values = split_fields(line, self.delimiter)
        if len(values) < 2:
            return []
        record = dict(zip(DEFAULT_HEADERS, values))
        return [record] if any(record.values()) else []

    @staticmethod
    def _whitespace(lines: list[str]) -> list[dict]:
        records = []
        for line in lines:
            words = line.split()
            if len(words) < 2:
                continue
            record = {"name": words[0], "surname": words[1]}
            if len(words) > 2:
                record["national_id"] = words[2]
            if len(words) > 3:
                record["phone"] = words[3]
            if len(words) > 4:
                record["address"] = " ".join(words[4:])
            records.append(record)
        return records


def build_records(text: str) -> list[dict[str, str]]:
    return RecordBuilder().build(text)
