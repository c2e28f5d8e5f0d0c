"""
db.models - SQLAlchemy ORM declarations.

Tables
------
asociados   - one row per association member.  The canonical member
              fields are stored as columns; unrecognised import columns
              land in extra_json instead of being dropped.
directiva   - board officers, one row per term in a position (cargo).
usuarios    - people allowed to sign in, with their role.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase


def _now():
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Asociado(Base):
    __tablename__ = "asociados"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # ── Canonical member fields (never NULL, "" when absent) ───────────
    name                   = Column(String(200), nullable=False, default="", index=True)
    surname                = Column(String(200), nullable=False, default="", index=True)
    national_id            = Column(String(50),  nullable=False, default="", index=True)
    phone                  = Column(String(50),  nullable=False, default="")
    address                = Column(Text,        nullable=False, default="")
    sector_or_neighborhood = Column(String(200), nullable=False, default="")
    land_area              = Column(String(50),  nullable=False, default="")
    livestock_count        = Column(String(50),  nullable=False, default="")

    # ── Passthrough columns from imports ───────────────────────────────
    extra_json = Column(Text, default="{}")

    created_at = Column(DateTime, default=_now)
    updated_at = Column(DateTime, default=_now, onupdate=_now)

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "name": self.name or "",
            "surname": self.surname or "",
            "national_id": self.national_id or "",
            "phone": self.phone or "",
            "address": self.address or "",
            "sector_or_neighborhood": self.sector_or_neighborhood or "",
            "land_area": self.land_area or "",
            "livestock_count": self.livestock_count or "",
        }
        try:
            d["extra"] = json.loads(self.extra_json) if self.extra_json else {}
        except json.JSONDecodeError:
            d["extra"] = {}
        return d


class MiembroDirectiva(Base):
    __tablename__ = "directiva"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    nombre       = Column(String(200), nullable=False)
    apellido     = Column(String(200), nullable=False)
    cedula       = Column(String(50),  nullable=False, index=True)
    telefono     = Column(String(50),  default="")
    email        = Column(String(200), default="")
    foto         = Column(Text,        default="")
    cargo        = Column(String(200), nullable=False, index=True)
    fecha_inicio = Column(String(10),  default=lambda: date.today().isoformat())
    fecha_fin    = Column(String(10),  default="")
    activo       = Column(Boolean,     nullable=False, default=True)
    biografia    = Column(Text,        default="")

    created_at = Column(DateTime, default=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre,
            "apellido": self.apellido,
            "cedula": self.cedula,
            "telefono": self.telefono or "",
            "email": self.email or "",
            "foto": self.foto or "",
            "cargo": self.cargo,
            "fecha_inicio": self.fecha_inicio or "",
            "fecha_fin": self.fecha_fin or "",
            "activo": bool(self.activo),
            "biografia": self.biografia or "",
        }


class Usuario(Base):
    """A person who can sign in.  rol is one of admin / editor / lector."""
    __tablename__ = "usuarios"

    id            = Column(Integer, primary_key=True, autoincrement=True)
    nombre        = Column(String(200), nullable=False, default="")
    email         = Column(String(200), unique=True, nullable=False, index=True)
    rol           = Column(String(20),  nullable=False, default="editor")
    password_hash = Column(String(300), nullable=False)

    created_at = Column(DateTime, default=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre or "",
            "email": self.email,
            "rol": self.rol,
        }
