"""
import_engine.field_map - Header token ↔ canonical member field mapping.

Headers in the wild come in many spellings ("Nombre", "NOMBRES",
"Nombre del asociado" …).  Matching is by substring on the lower-cased
token, first hit wins.  Tokens that match nothing pass through verbatim
and end up in Asociado.extra_json.
"""

from __future__ import annotations

# Canonical MemberRecord keys, in the default column order used when a
# file carries no header line.
CANONICAL_FIELDS: tuple[str, ...] = (
    "name",
    "surname",
    "national_id",
    "phone",
    "address",
    "sector_or_neighborhood",
    "land_area",
    "livestock_count",
)

DEFAULT_HEADERS = CANONICAL_FIELDS

# A record must carry at least one of these to be stored
IDENTITY_FIELDS = ("name", "surname", "national_id")

# (trigger substrings, canonical field) - order is priority
_TRIGGERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("nombre",),           "name"),
    (("apellido",),         "surname"),
    (("cedula",),           "national_id"),
    (("telefono",),         "phone"),
    (("direccion",),        "address"),
    (("sector", "barrio"),  "sector_or_neighborhood"),
    (("tarea",),            "land_area"),
    (("animal",),           "livestock_count"),
)


def map_field(token: str) -> str:
    """Return the canonical field for a lower-cased header token."""
    if token in CANONICAL_FIELDS:
        return token
    for triggers, field in _TRIGGERS:
        if any(t in token for t in triggers):
            return field
    return token


def empty_record() -> dict[str, str]:
    return {f: "" for f in CANONICAL_FIELDS}
