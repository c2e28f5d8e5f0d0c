import json
import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError

from db.models import Asociado
from import_engine import ImportPipeline, ImportState, run_import
from import_engine.report import ImportReport
from services.store import CollectionStore


class FlakyStore(CollectionStore):
    """Refuses every record whose name is 'Caida'."""

    @staticmethod
    def insert(session, collection, data):
        if data.get("name") == "Caida":
            raise RuntimeError("store unavailable")
        return CollectionStore.insert(session, collection, data)


def _stored(session):
    return session.query(Asociado).order_by(Asociado.id).all()


def test_two_line_csv_is_stored(session):
    report = ImportPipeline(session).run_csv("nombre,apellido\nAna,Ruiz\n")

    assert report.state is ImportState.COMPLETED
    assert (report.total, report.succeeded, report.failed) == (1, 1, 0)
    assert report.errors == []
    assert not report.total_failure

    [member] = _stored(session)
    assert member.name == "Ana"
    assert member.surname == "Ruiz"
    # absent canonical fields are stored as empty strings
    assert member.national_id == ""
    assert member.livestock_count == ""


def test_empty_input_fails_before_persisting(session):
    report = ImportPipeline(session).run_csv("")

    assert report.state is ImportState.FAILED
    assert report.message == "empty or no valid lines"
    assert report.total == 0
    assert _stored(session) == []


def test_undecodable_bytes_fail_the_run(session):
    report = ImportPipeline(session).run_csv(b"\x81\x8d\x81")

    assert report.state is ImportState.FAILED
    assert "could not decode" in report.message
    assert _stored(session) == []


def test_unextractable_text_fails_with_builder_message(session):
    report = ImportPipeline(session).run_csv("x\ny\n")
    assert report.state is ImportState.FAILED
    assert report.message == "no records could be extracted"


def test_records_without_identity_fields_are_counted_as_failures(session):
    text = "nombre,apellido,telefono\nAna,Ruiz,1\n,,809-555-0000\nLuis,,2\n"
    report = ImportPipeline(session).run_csv(text)

    assert report.state is ImportState.COMPLETED
    assert (report.total, report.succeeded, report.failed) == (3, 2, 1)
    assert report.errors == ["Record 2: record has no name, surname or national ID"]
    assert [m.name for m in _stored(session)] == ["Ana", "Luis"]


def test_store_failure_does_not_abort_the_run(session):
    text = "nombre,apellido\nAna,Ruiz\nCaida,Uno\nLuis,Gomez\n"
    report = ImportPipeline(session, store=FlakyStore).run_csv(text)

    assert report.state is ImportState.COMPLETED
    assert (report.succeeded, report.failed) == (2, 1)
    assert report.errors == ["Record 2: Unexpected: store unavailable"]
    assert [m.name for m in _stored(session)] == ["Ana", "Luis"]


def test_every_record_failing_is_still_completed(session):
    report = ImportPipeline(session, store=FlakyStore).run_csv("Caida Uno\nCaida Dos\n")

    assert report.state is ImportState.COMPLETED
    assert report.total_failure
    assert report.failed == 2


def test_progress_is_reported_after_every_attempt(session):
    calls = []
    text = "nombre,apellido\nAna,Ruiz\nCaida,Uno\nLuis,Gomez\n"
    ImportPipeline(session, store=FlakyStore,
                   on_progress=lambda done, total: calls.append((done, total))).run_csv(text)

    assert calls == [(1, 3), (1, 3), (2, 3)]


def test_passthrough_columns_are_kept_in_extra_json(session):
    ImportPipeline(session).run_csv("nombre,apellido,email,notas\nAna,Ruiz,ana@example.org,\n")

    [member] = _stored(session)
    assert json.loads(member.extra_json) == {"email": "ana@example.org"}


def test_timestamp_and_extra_json_headers_are_kept_as_extras(session):
    text = "nombre,apellido,created_at,updated_at,extra_json\nAna,Ruiz,2020-01-01,ayer,x\n"
    report = ImportPipeline(session).run_csv(text)

    assert (report.succeeded, report.failed) == (1, 0)
    [member] = _stored(session)
    assert json.loads(member.extra_json) == {
        "created_at": "2020-01-01",
        "updated_at": "ayer",
        "extra_json": "x",
    }
    assert member.created_at is not None
    assert member.created_at.year != 2020


def test_json_timestamp_key_is_kept_as_extra(session):
    report = ImportPipeline(session).run_json('[{"nombre": "Ana", "created_at": "x"}]')

    assert report.succeeded == 1
    [member] = _stored(session)
    assert json.loads(member.extra_json) == {"created_at": "x"}


class ConstraintStore(CollectionStore):
    """Rejects every insert the way the database driver would."""

    @staticmethod
    def insert(session, collection, data):
        raise IntegrityError(
            "INSERT INTO asociados (name, surname, national_id) VALUES (?, ?, ?)",
            (data["name"], data["surname"], data["national_id"]),
            sqlite3.IntegrityError("UNIQUE constraint failed: asociados.national_id"),
        )


def test_database_errors_do_not_leak_member_data(session):
    report = ImportPipeline(session, store=ConstraintStore).run_csv(
        "nombre,apellido,cedula\nAna,Ruiz,001-1234567-8\n")

    assert report.failed == 1
    [error] = report.errors
    assert error == ("Record 1: Unexpected: IntegrityError: "
                     "UNIQUE constraint failed: asociados.national_id")
    assert "INSERT" not in error
    assert "001-1234567-8" not in error


def test_bulk_import_does_not_check_duplicates(session):
    text = "nombre;apellido;cedula\nAna;Ruiz;001\nAna;Ruiz;001\n"
    report = ImportPipeline(session).run_csv(text)

    assert report.succeeded == 2
    assert len(CollectionStore.find(session, "asociados", national_id="001")) == 2


def test_json_run(session):
    payload = json.dumps([
        {"nombre": "Juan", "apellido": "Pérez", "cedula": "001-1"},
        {"telefono": "809-555-0000"},
    ])
    report = ImportPipeline(session).run_json(payload)

    assert report.tier == "json"
    assert (report.total, report.succeeded, report.failed) == (2, 1, 1)
    assert _stored(session)[0].surname == "Pérez"


def test_invalid_json_fails_the_run(session):
    report = ImportPipeline(session).run_json("{not json")
    assert report.state is ImportState.FAILED
    assert report.message.startswith("invalid JSON")


def test_run_import_opens_its_own_session(app, session):
    report = run_import("Ana Ruiz 001-2\n".encode("utf-8"))

    assert report.tier == "whitespace"
    assert report.succeeded == 1
    [member] = _stored(session)
    assert (member.name, member.surname, member.national_id) == ("Ana", "Ruiz", "001-2")


def test_run_import_rejects_unknown_source(app):
    with pytest.raises(ValueError):
        run_import("a,b", source="xml")


def test_report_refuses_illegal_transitions():
    report = ImportReport()
    with pytest.raises(RuntimeError):
        report.advance(ImportState.PERSISTING)

    report.advance(ImportState.READING)
    report.fail("boom")
    assert report.finished
    with pytest.raises(RuntimeError):
        report.advance(ImportState.PARSING)


def test_report_to_dict():
    report = ImportReport(total=2, succeeded=1)
    report.add_error(2, "bad")
    assert report.to_dict() == {
        "state": "idle",
        "total": 2,
        "succeeded": 1,
        "failed": 1,
        "errors": ["Record 2: bad"],
        "message": "",
        "tier": None,
        "total_failure": False,
    }
