"""
import_engine.importer - Top-level orchestrator.

Coordinates decode → record_builder / json_loader → row_processor →
store, one record at a time, and produces a structured ImportReport.

Each record is committed on its own: a failed insert is rolled back,
counted, and the run moves on to the next record.  Bulk imports do not
check for duplicate national IDs.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.engine import get_session
from import_engine.csv_parser import decode
from import_engine.errors import FormatError, PersistenceError, ReadError
from import_engine.json_loader import load_json_records
from import_engine.record_builder import RecordBuilder
from import_engine.report import ImportReport, ImportState
from import_engine.row_processor import RowProcessor
from services.store import CollectionStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]   # (succeeded, total)

SOURCES = ("csv", "json")


def _db_reason(exc: SQLAlchemyError) -> str:
    """Driver error without the SQL statement and its member data."""
    cause = getattr(exc, "orig", None) or exc
    lines = str(cause).splitlines()
    reason = lines[0] if lines else ""
    return f"{type(cause).__name__}: {reason}" if reason else type(cause).__name__


class ImportPipeline:
    """
    One pipeline instance = one run.  The report it owns is final once
    run_csv() / run_json() returns.
    """

    def __init__(
        self,
        session: Session,
        *,
        collection: str = "asociados",
        store=CollectionStore,
        on_progress: Optional[ProgressCallback] = None,
    ):
        self.session = session
        self.collection = collection
        self.store = store
        self.on_progress = on_progress
        self.report = ImportReport()

    def run_csv(self, content: str | bytes) -> ImportReport:
        text = self._read(content)
        if text is None:
            return self.report

        builder = RecordBuilder()
        try:
            records = builder.build(text)
        except FormatError as exc:
            return self._abort(exc)
        self.report.tier = builder.tier
        return self._persist(records)

    def run_json(self, content: str | bytes) -> ImportReport:
        text = self._read(content)
        if text is None:
            return self.report

        try:
            records = load_json_records(text)
        except FormatError as exc:
            return self._abort(exc)
        self.report.tier = "json"
        return self._persist(records)

    # ── Stages ─────────────────────────────────────────────────────────

    def _read(self, content: str | bytes) -> Optional[str]:
        self.report.advance(ImportState.READING)
        try:
            text = decode(content)
        except ReadError as exc:
            self._abort(exc)
            return None
        logger.info(f"Read {len(text)} characters")
        self.report.advance(ImportState.PARSING)
        return text

    def _abort(self, exc: Exception) -> ImportReport:
        logger.warning(f"Import failed: {exc}")
        self.report.fail(str(exc))
        return self.report

    def _persist(self, records: list[dict]) -> ImportReport:
        report = self.report
        report.advance(ImportState.PERSISTING)
        report.total = len(records)

        for idx, record in enumerate(records, start=1):
            try:
                doc = RowProcessor.process(record)
                self.store.insert(self.session, self.collection, doc)
                self.session.commit()
                report.add_success()
            except PersistenceError as exc:
                self.session.rollback()
                report.add_error(idx, str(exc))
            except SQLAlchemyError as exc:
                self.session.rollback()
                logger.exception(f"Insert of record {idx} failed")
                report.add_error(idx, f"Unexpected: {_db_reason(exc)}")
            except Exception as exc:
                self.session.rollback()
                logger.exception(f"Insert of record {idx} failed")
                report.add_error(idx, f"Unexpected: {exc}")

            if self.on_progress is not None:
                self.on_progress(report.succeeded, report.total)

        report.advance(ImportState.COMPLETED)
        logger.info(f"Import finished: {report.succeeded}/{report.total} stored, "
                    f"{report.failed} failed")
        return report


def run_import(
    file_content: str | bytes,
    *,
    source: str = "csv",
    on_progress: Optional[ProgressCallback] = None,
) -> ImportReport:
    """
    Import a CSV blob or a JSON text into the asociados collection.

    Parameters
    ----------
    file_content : raw upload (bytes or str)
    source : "csv" or "json"
    on_progress : called with (succeeded, total) after every record

    Returns
    -------
    ImportReport with per-record error details
    """
    if source not in SOURCES:
        raise ValueError(f"unknown import source {source!r}")

    session = get_session()
    try:
        pipeline = ImportPipeline(session, on_progress=on_progress)
        if source == "json":
            return pipeline.run_json(file_content)
        return pipeline.run_csv(file_content)
    finally:
        session.close()
