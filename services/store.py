"""
services.store - Collection-style access to the document tables.

Callers address data by collection name ("asociados", "directiva",
"usuarios") the way the import engine and the services see it:
insert a mapping, find by exact field match, enumerate, delete by id.
Session management stays with the caller; every write only flushes.
"""

from __future__ import annotations

import json

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from db.models import Asociado, MiembroDirectiva, Usuario

COLLECTIONS = {
    "asociados": Asociado,
    "directiva": MiembroDirectiva,
    "usuarios": Usuario,
}


def _model(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise KeyError(f"unknown collection {collection!r}") from None


# Maintained by the table itself, never taken from caller data.
BOOKKEEPING = {"id", "created_at", "updated_at", "extra_json"}


def _columns(model) -> set[str]:
    return set(inspect(model).columns.keys()) - BOOKKEEPING


class CollectionStore:

    @staticmethod
    def insert(session: Session, collection: str, data: dict) -> int:
        """
        Add one document and return its new id.  Keys that are not
        data columns (timestamps and extra_json included) go to
        extra_json where the table has one, otherwise they are ignored.
        """
        model = _model(collection)
        columns = _columns(model)
        values = {k: v for k, v in data.items() if k in columns}
        if hasattr(model, "extra_json"):
            extra = {k: v for k, v in data.items()
                     if k and k not in columns and v not in (None, "")}
            values["extra_json"] = json.dumps(extra, ensure_ascii=False)
        obj = model(**values)
        session.add(obj)
        session.flush()
        return obj.id

    @staticmethod
    def get(session: Session, collection: str, doc_id: int):
        return session.get(_model(collection), doc_id)

    @staticmethod
    def find(session: Session, collection: str, **equals) -> list:
        """Documents whose fields equal every given value."""
        return session.query(_model(collection)).filter_by(**equals).all()

    @staticmethod
    def all(session: Session, collection: str) -> list:
        model = _model(collection)
        return session.query(model).order_by(model.id).all()

    @staticmethod
    def count(session: Session, collection: str) -> int:
        return session.query(_model(collection)).count()

    @staticmethod
    def delete(session: Session, collection: str, doc_id: int) -> bool:
        obj = session.get(_model(collection), doc_id)
        if obj is None:
            return False
        session.delete(obj)
        session.flush()
        return True

    @staticmethod
    def clear(session: Session, collection: str) -> int:
        """Delete every document in the collection, return how many."""
        deleted = session.query(_model(collection)).delete()
        session.flush()
        return deleted
