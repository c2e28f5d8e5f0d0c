"""
services.asociados_service - CRUD operations on member records.

All session management is the caller's responsibility (open before,
close/commit after).  This keeps the service testable and allows
the caller to batch multiple operations in one transaction.

Single-record creation goes through the duplicate national-ID check;
bulk imports (import_engine) do not.  The check and the insert are two
separate statements, so two concurrent submissions with the same ID can
both get in.
"""

from __future__ import annotations

import json
import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from db.models import Asociado
from import_engine.field_map import CANONICAL_FIELDS, IDENTITY_FIELDS
from services.errors import DuplicateError, ValidationError
from services.store import CollectionStore

logger = logging.getLogger(__name__)

COLLECTION = "asociados"


def _clean(data: dict) -> dict[str, str]:
    """Canonical fields only, as trimmed strings."""
    return {f: str(data.get(f) or "").strip() for f in CANONICAL_FIELDS}


class AsociadosService:

    # Columns searched by the list filter
    SEARCH_COLUMNS = (
        Asociado.name,
        Asociado.surname,
        Asociado.national_id,
        Asociado.sector_or_neighborhood,
    )

    # ── Create ─────────────────────────────────────────────────────────

    @staticmethod
    def check_duplicate(session: Session, national_id: str) -> None:
        """Raise DuplicateError if *national_id* is already stored.  Empty IDs pass."""
        if not national_id:
            return
        if CollectionStore.find(session, COLLECTION, national_id=national_id):
            raise DuplicateError(national_id)

    @staticmethod
    def create(session: Session, data: dict) -> Asociado:
        """
        Store one member entered by hand.  Requires name and surname,
        rejects a national ID that is already on file.
        """
        doc = _clean(data)
        if not (doc["name"] and doc["surname"]):
            raise ValidationError("name and surname are required")

        AsociadosService.check_duplicate(session, doc["national_id"])

        new_id = CollectionStore.insert(session, COLLECTION, doc)
        logger.info(f"Member {new_id} created ({doc['surname']}, {doc['name']})")
        return CollectionStore.get(session, COLLECTION, new_id)

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def get(session: Session, member_id: int) -> Asociado | None:
        return CollectionStore.get(session, COLLECTION, member_id)

    @staticmethod
    def search(
        session: Session,
        *,
        q: str = "",
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Asociado], int]:
        """
        Members matching *q* (case-insensitive substring on name, surname,
        national ID or sector), ordered by surname then name.
        Returns (page, total_matching).
        """
        query = session.query(Asociado)
        q = q.strip().lower()
        if q:
            like = f"%{q}%"
            query = query.filter(or_(*(func.lower(col).like(like)
                                       for col in AsociadosService.SEARCH_COLUMNS)))
        total = query.count()
        page = (query.order_by(Asociado.surname, Asociado.name, Asociado.id)
                .offset(offset).limit(limit).all())
        return page, total

    @staticmethod
    def count(session: Session) -> int:
        return CollectionStore.count(session, COLLECTION)

    # ── Update ─────────────────────────────────────────────────────────

    @staticmethod
    def update(session: Session, member: Asociado, data: dict) -> Asociado:
        """Overwrite the canonical fields present in *data*."""
        for f in CANONICAL_FIELDS:
            if f in data:
                setattr(member, f, str(data[f] or "").strip())

        if not any(getattr(member, f) for f in IDENTITY_FIELDS):
            raise ValidationError("record has no name, surname or national ID")

        if "extra" in data and isinstance(data["extra"], dict):
            extra = {k: str(v) for k, v in data["extra"].items() if v not in (None, "")}
            member.extra_json = json.dumps(extra, ensure_ascii=False)

        session.flush()
        return member

    # ── Delete ─────────────────────────────────────────────────────────

    @staticmethod
    def delete(session: Session, member: Asociado) -> None:
        CollectionStore.delete(session, COLLECTION, member.id)

    @staticmethod
    def delete_all(session: Session) -> int:
        deleted = CollectionStore.clear(session, COLLECTION)
        logger.warning(f"Deleted all {deleted} members")
        return deleted
