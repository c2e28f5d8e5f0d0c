import pytest

from import_engine.field_map import CANONICAL_FIELDS, empty_record, map_field


@pytest.mark.parametrize("token,expected", [
    ("nombre", "name"),
    ("nombres", "name"),
    ("apellido", "surname"),
    ("apellidos", "surname"),
    ("cedula", "national_id"),
    ("no. cedula", "national_id"),
    ("telefono", "phone"),
    ("direccion", "address"),
    ("sector", "sector_or_neighborhood"),
    ("barrio", "sector_or_neighborhood"),
    ("sectorbarrio", "sector_or_neighborhood"),
    ("cantidad de tareas", "land_area"),
    ("cria de animales", "livestock_count"),
])
def test_trigger_substrings(token, expected):
    assert map_field(token) == expected


def test_first_trigger_in_priority_order_wins():
    # contains both "apellido" and "nombre"; nombre is checked first
    assert map_field("apellido y nombre") == "name"
    # "telefono" is checked before "direccion"
    assert map_field("direccion o telefono") == "phone"


def test_unrecognised_header_passes_through_verbatim():
    assert map_field("correo electronico") == "correo electronico"
    assert map_field("") == ""


def test_canonical_names_map_to_themselves():
    for field in CANONICAL_FIELDS:
        assert map_field(field) == field


def test_mapping_is_stable_across_calls():
    tokens = ["nombre", "email", "tareas", "barrio"]
    first = [map_field(t) for t in tokens]
    for _ in range(3):
        assert [map_field(t) for t in tokens] == first


def test_empty_record_has_every_canonical_field():
    rec = empty_record()
    assert set(rec) == set(CANONICAL_FIELDS)
    assert all(v == "" for v in rec.values())
