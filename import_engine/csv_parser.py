"""
import_engine.csv_parser - Low-level text decoding and splitting.

Responsibilities:
  • Byte decoding (UTF-8 with or without BOM, Windows-1252 fallback)
  • Delimiter sniffing on the first line
  • Line / token splitting with one layer of quote stripping

Quoted delimiters are NOT protected: `"Perez, Juan"` splits in two.
"""

from __future__ import annotations

import re

from import_engine.errors import FormatError, ReadError

_LINE_BREAKS = re.compile(r"[\r\n]+")

ENCODINGS = ("utf-8-sig", "cp1252")


def decode(raw: str | bytes) -> str:
    """Return text for raw upload content, or raise ReadError."""
    if isinstance(raw, str):
        return raw[1:] if raw.startswith("\ufeff") else raw
    for encoding in ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ReadError(f"could not decode file (tried {', '.join(ENCODINGS)})")


def split_lines(text: str) -> list[str]:
    """Split on any run of CR/LF and drop blank lines."""
    lines = [ln for ln in _LINE_BREAKS.split(text) if ln.strip()]
    if not lines:
        raise FormatError("empty or no valid lines")
    return lines


def sniff_delimiter(text: str) -> str:
    """Pick ';', tab or ',' from the first non-blank line."""
    first = next((ln for ln in _LINE_BREAKS.split(text) if ln.strip()), "")
    if ";" in first:
        return ";"
    if "\t" in first:
        return "\t"
    return ","


def strip_quotes(token: str) -> str:
    token = token.strip()
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "\"'":
        return token[1:-1]
    return token


def split_fields(line: str, delimiter: str) -> list[str]:
    return [strip_quotes(tok) for tok in line.split(delimiter)]


def parse_rows(text: str, delimiter: str | None = None) -> list[list[str]]:
    """Raw rows for every non-blank line of *text*."""
    if delimiter is None:
        delimiter = sniff_delimiter(text)
    return [split_fields(ln, delimiter) for ln in split_lines(text)]
