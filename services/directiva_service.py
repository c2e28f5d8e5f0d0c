"""
services.directiva_service - Board officers.

Positions are addressed by URL slug ("secretario-general") and stored
by display title ("Secretario General").
"""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from db.models import MiembroDirectiva
from services.errors import ValidationError
from services.store import CollectionStore

COLLECTION = "directiva"

# slug → display title
CARGOS: dict[str, str] = {
    "presidente":              "Presidente",
    "vicepresidente":          "Vice Presidente",
    "secretario-general":      "Secretario General",
    "secretario-acta":         "Secretario de Acta",
    "secretario-finanzas":     "Secretario de Finanzas",
    "secretario-organizacion": "Secretario de Organizacion",
    "primer-vocal":            "Primer Vocal",
    "segundo-vocal":           "Segundo Vocal",
    "informatica":             "Informatica",
    "prensa-propaganda":       "Secretario de Prensa y Propaganda",
    "secretario-deporte":      "Secretario de Deporte",
    "medioambiente":           "Secretario de Medioambiente",
    "relaciones-publicas":     "Secretario de Relaciones Públicas",
    "disciplina":              "Secretario de Disciplina",
    "secretario-salud":        "Secretario de Salud",
}

DEFAULT_TITLE = "Miembro de Directiva"

REQUIRED = ("nombre", "apellido", "cedula", "cargo")
TEXT_FIELDS = ("nombre", "apellido", "cedula", "telefono", "email", "foto",
               "cargo", "fecha_inicio", "fecha_fin", "biografia")


def cargo_title(slug: str) -> str:
    return CARGOS.get(slug, DEFAULT_TITLE)


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "si", "sí", "on")
    return bool(value)


class DirectivaService:

    @staticmethod
    def create(session: Session, data: dict) -> MiembroDirectiva:
        doc = {f: str(data.get(f) or "").strip() for f in TEXT_FIELDS}
        missing = [f for f in REQUIRED if not doc[f]]
        if missing:
            raise ValidationError(f"missing required fields: {', '.join(missing)}")
        if not doc["fecha_inicio"]:
            doc["fecha_inicio"] = date.today().isoformat()
        doc["activo"] = _as_bool(data.get("activo", True))

        new_id = CollectionStore.insert(session, COLLECTION, doc)
        return CollectionStore.get(session, COLLECTION, new_id)

    @staticmethod
    def get(session: Session, member_id: int) -> MiembroDirectiva | None:
        return CollectionStore.get(session, COLLECTION, member_id)

    @staticmethod
    def list_all(session: Session, *, only_active: bool = False) -> list[MiembroDirectiva]:
        query = session.query(MiembroDirectiva)
        if only_active:
            query = query.filter(MiembroDirectiva.activo.is_(True))
        return query.order_by(MiembroDirectiva.cargo, MiembroDirectiva.apellido).all()

    @staticmethod
    def by_cargo(session: Session, slug: str) -> MiembroDirectiva | None:
        """Active holder of the position *slug*, or None."""
        found = CollectionStore.find(session, COLLECTION,
                                     cargo=cargo_title(slug), activo=True)
        return found[0] if found else None

    @staticmethod
    def update(session: Session, member: MiembroDirectiva, data: dict) -> MiembroDirectiva:
        for f in TEXT_FIELDS:
            if f in data:
                setattr(member, f, str(data[f] or "").strip())
        if "activo" in data:
            member.activo = _as_bool(data["activo"])

        missing = [f for f in REQUIRED if not getattr(member, f)]
        if missing:
            raise ValidationError(f"missing required fields: {', '.join(missing)}")
        session.flush()
        return member

    @staticmethod
    def delete(session: Session, member: MiembroDirectiva) -> None:
        CollectionStore.delete(session, COLLECTION, member.id)
