import pytest

from import_engine.errors import FormatError
from import_engine.record_builder import (
    TIER_HEADER,
    TIER_HEADERLESS,
    TIER_WHITESPACE,
    RecordBuilder,
    build_records,
)


def test_quoted_header_maps_to_canonical_fields():
    text = '"Nombre","Apellido","Cedula"\n"Juan","Perez","001-1"\n'
    assert build_records(text) == [
        {"name": "Juan", "surname": "Perez", "national_id": "001-1"},
    ]


def test_simple_comma_file():
    builder = RecordBuilder()
    records = builder.build("nombre,apellido\nAna,Ruiz\n")

    assert builder.delimiter == ","
    assert builder.tier == TIER_HEADER
    assert records == [{"name": "Ana", "surname": "Ruiz"}]


def test_semicolon_export_with_all_columns():
    text = (
        "Nombre;Apellido;Cédula;Teléfono;Dirección;Sector o Barrio;Tareas;Animales\n"
        "Pedro;Martínez;001-0000001-1;809-555-0101;Calle 1;Los Indios;12;4\n"
    )
    [rec] = build_records(text)
    # accented headers do not contain the unaccented triggers
    assert rec["name"] == "Pedro"
    assert rec["surname"] == "Martínez"
    assert rec["cédula"] == "001-0000001-1"
    assert rec["sector_or_neighborhood"] == "Los Indios"
    assert rec["land_area"] == "12"
    assert rec["livestock_count"] == "4"


def test_surplus_values_are_dropped_not_merged():
    [rec] = build_records("nombre,apellido\nAna,Ruiz,001-2,extra\n")
    assert rec == {"name": "Ana", "surname": "Ruiz"}


def test_short_rows_only_fill_the_columns_they_have():
    [rec] = build_records("nombre,apellido,cedula,telefono\nAna,Ruiz\n")
    assert rec == {"name": "Ana", "surname": "Ruiz"}


def test_rows_without_any_value_are_skipped():
    records = build_records("nombre,apellido\n,\n ,  \nLuis,Gomez\n")
    assert records == [{"name": "Luis", "surname": "Gomez"}]


def test_unknown_columns_pass_through():
    [rec] = build_records("nombre,apellido,email\nAna,Ruiz,ana@example.org\n")
    assert rec["email"] == "ana@example.org"


def test_single_delimited_line_is_read_as_headerless_data():
    builder = RecordBuilder()
    records = builder.build("Ana;Ruiz;001-2;809-555-0000\n")

    assert builder.tier == TIER_HEADERLESS
    assert records == [{
        "name": "Ana", "surname": "Ruiz",
        "national_id": "001-2", "phone": "809-555-0000",
    }]


def test_single_header_line_is_taken_as_data():
    [rec] = build_records("nombre,apellido\n")
    assert rec == {"name": "nombre", "surname": "apellido"}


def test_space_separated_single_line_falls_back_to_whitespace_split():
    builder = RecordBuilder()
    records = builder.build("Ana Ruiz 001-2\n")

    assert builder.tier == TIER_WHITESPACE
    assert records == [{"name": "Ana", "surname": "Ruiz", "national_id": "001-2"}]


def test_whitespace_split_joins_the_rest_into_the_address():
    [rec] = build_records("Juan Perez 001-1 809-555-1234 Calle Principal   12\n")
    assert rec == {
        "name": "Juan",
        "surname": "Perez",
        "national_id": "001-1",
        "phone": "809-555-1234",
        "address": "Calle Principal 12",
    }


def test_headerless_multi_line_file_uses_whitespace_split():
    records = build_records("Ana Ruiz\nSolo\nLuis Gomez 002\n")
    assert records == [
        {"name": "Ana", "surname": "Ruiz"},
        {"name": "Luis", "surname": "Gomez", "national_id": "002"},
    ]


def test_whitespace_tier_not_used_when_header_tier_succeeds():
    # second data line would split into three words but must not be re-read
    records = build_records("nombre,apellido\nAna Maria,Ruiz Soto\n")
    assert records == [{"name": "Ana Maria", "surname": "Ruiz Soto"}]


def test_nothing_extractable_raises_format_error():
    with pytest.raises(FormatError, match="no records could be extracted"):
        build_records("x\ny\n")


def test_empty_text_raises_format_error():
    with pytest.raises(FormatError, match="empty or no valid lines"):
        build_records("")
