"""Unit tests for lenient record parsing.

Covers:
- ``FieldReader``: absent vs malformed fields, malformed fields recorded.
- Geo points in both key spellings, out-of-range coordinates.
- ``PersonRecord`` name fallbacks and roles.
"""

from __future__ import annotations

import pytest

from modules.core.store.interfaces import Document
from modules.users.dtos import PersonRecord
from shared.domain.records import FieldReader, GeoPoint, parse_geo_point
from shared.domain.values import MalformedValue

pytestmark = pytest.mark.unit


def _reader(**data):
    return FieldReader(Document(collection="users", id="u1", data=data))


# ---------------------------------------------------------------------------
# FieldReader
# ---------------------------------------------------------------------------


class TestFieldReader:
    def test_absent_field_is_none_and_not_malformed(self):
        reader = _reader()
        assert reader.text("firstName") is None
        assert reader.timestamp("DateFinish") is None
        assert reader.malformed == []

    def test_malformed_field_is_none_and_recorded(self):
        reader = _reader(DateFinish="yesterday", ShippingScore="fast")
        assert reader.timestamp("DateFinish") is None
        assert reader.number("ShippingScore") is None
        assert reader.malformed == ["DateFinish", "ShippingScore"]

    def test_text_accepts_numbers(self):
        assert _reader(phone_number=612345678).text("phone_number") == "612345678"

    def test_text_rejects_maps(self):
        reader = _reader(firstName={"first": "Ana"})
        assert reader.text("firstName") is None
        assert reader.malformed == ["firstName"]

    def test_integer_rejects_fractions(self):
        reader = _reader(maxNumber=2.5)
        assert reader.integer("maxNumber") is None
        assert reader.malformed == ["maxNumber"]

    def test_integer_accepts_whole_floats(self):
        assert _reader(maxNumber=3.0).integer("maxNumber") == 3

    def test_boolean_is_strict(self):
        assert _reader(isOpen=True).boolean("isOpen") is True
        reader = _reader(isOpen="yes")
        assert reader.boolean("isOpen") is None
        assert reader.malformed == ["isOpen"]

    def test_number_rejects_infinity(self):
        reader = _reader(ShippingScore=float("inf"))
        assert reader.number("ShippingScore") is None
        assert reader.malformed == ["ShippingScore"]


# ---------------------------------------------------------------------------
# Geo points
# ---------------------------------------------------------------------------


class TestParseGeoPoint:
    def test_latitude_longitude_keys(self):
        point = parse_geo_point({"latitude": 48.85, "longitude": 2.35})
        assert point == GeoPoint(latitude=48.85, longitude=2.35)

    def test_lat_lng_keys_and_numeric_strings(self):
        point = parse_geo_point({"lat": "36.8", "lng": "10.18"})
        assert point == GeoPoint(latitude=36.8, longitude=10.18)

    def test_empty_map_is_absent(self):
        assert parse_geo_point({}) is None

    @pytest.mark.parametrize(
        "value",
        [
            {"latitude": 91, "longitude": 0},
            {"latitude": 0, "longitude": -181},
            {"latitude": 10},
            {"latitude": "north", "longitude": 2},
            "48.85,2.35",
        ],
    )
    def test_malformed_raises(self, value):
        with pytest.raises(MalformedValue):
            parse_geo_point(value)


# ---------------------------------------------------------------------------
# PersonRecord
# ---------------------------------------------------------------------------


class TestPersonRecord:
    def _person(self, **data):
        return PersonRecord.from_document(Document(collection="users", id="u1", data=data))

    def test_full_name_from_first_and_second_name(self):
        person = self._person(firstName="Amira", secondName="Ben Salah", display_name="amira")
        assert person.full_name == "Amira Ben Salah"

    def test_full_name_falls_back_to_display_name(self):
        assert self._person(display_name="amira.b").full_name == "amira.b"

    def test_full_name_placeholder(self):
        assert self._person(firstName="  ").full_name == "Unnamed User"

    def test_roles(self):
        assert self._person(role="Client").is_client
        courier = self._person(role="Delivery_Man", ShippingScore=4)
        assert courier.is_delivery_person
        assert courier.shipping_score == 4.0

    def test_malformed_location_recorded(self):
        person = self._person(location={"latitude": 200, "longitude": 0})
        assert person.location is None
        assert person.malformed_fields == ("location",)
