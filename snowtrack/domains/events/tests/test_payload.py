"""Tests for the parameter encoder."""

import base64
import json
from types import MappingProxyType

import pytest
from pydantic import BaseModel

from snowtrack.core.config import Platform
from snowtrack.domains.events.payload import (
    Payload,
    dimensions,
    encode_value,
    format_float,
    to_json,
)


class TestEncodeValue:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (15, "15"),
            (0, "0"),
            (10.5, "10.5"),
            ("red", "red"),
            (True, "1"),
            (False, "0"),
            (1e16, "10000000000000000"),
            (1e-7, "0.0000001"),
            (1.5e-5, "0.000015"),
            (Platform.WEB, "web"),
        ],
    )
    def test_renders_string(self, value, expected):
        assert encode_value(value) == expected

    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_values_are_omitted(self, value):
        assert encode_value(value) is None

    def test_unexpected_types_are_stringified(self):
        class Thing:
            def __str__(self):
                return "thing"

        assert encode_value(Thing()) == "thing"


def test_dimensions():
    assert dimensions(400, 200) == "400x200"


def test_to_json_is_compact_and_ordered():
    assert to_json({"schema": "s", "data": {"b": 1, "a": "é"}}) == '{"schema":"s","data":{"b":1,"a":"é"}}'


class TestPayload:
    def test_add_skips_absent_values(self):
        payload = Payload()
        payload.add("se_la", None)
        payload.add("se_pr", "")
        payload.add("se_va", 15)

        assert dict(payload) == {"se_va": "15"}
        assert "se_la" not in payload

    def test_strings_are_not_escaped(self):
        payload = Payload()
        payload.add("url", "http://www.example.com/?a=b&c=d e")

        assert payload["url"] == "http://www.example.com/?a=b&c=d e"

    def test_add_dict_preserves_order(self):
        payload = Payload()
        payload.add_dict({"e": "pv", "url": "u", "page": None, "refr": "r"})

        assert list(payload) == ["e", "url", "refr"]

    def test_add_json_raw(self):
        payload = Payload()
        payload.add_json("cx", "co", {"schema": "s", "data": [1]})

        assert payload["co"] == '{"schema":"s","data":[1]}'
        assert "cx" not in payload

    def test_add_json_base64(self):
        payload = Payload(encode_base64=True)
        value = {"schema": "s", "data": {"price": 20}}
        payload.add_json("ue_px", "ue_pr", value)

        encoded = payload["ue_px"]
        assert "=" not in encoded
        padded = encoded + "=" * (-len(encoded) % 4)
        assert json.loads(base64.urlsafe_b64decode(padded)) == value
        assert "ue_pr" not in payload

    @pytest.mark.parametrize("value", [None, {}, []])
    def test_add_json_skips_empty(self, value):
        payload = Payload()
        payload.add_json("cx", "co", value)

        assert len(payload) == 0

    def test_as_dict_is_a_copy(self):
        payload = Payload()
        payload.add("e", "pv")
        copy = payload.as_dict()
        copy["e"] = "se"

        assert payload["e"] == "pv"


class TestFormatFloat:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (1e16, "10000000000000000"),
            (2.5e20, "250000000000000000000"),
            (1e-7, "0.0000001"),
            (10.5, "10.5"),
            (15.0, "15.0"),
            (float("inf"), "inf"),
        ],
    )
    def test_plain_decimal(self, value, expected):
        assert format_float(value) == expected


class TestToJsonMappings:
    def test_mapping_proxy_is_an_object(self):
        event_json = MappingProxyType(
            {"schema": "iglu:com.acme/x/jsonschema/1-0-0", "data": MappingProxyType({"a": 1})}
        )

        text = to_json({"schema": "s", "data": event_json})

        assert text == (
            '{"schema":"s","data":{"schema":"iglu:com.acme/x/jsonschema/1-0-0","data":{"a":1}}}'
        )

    def test_tuples_and_models(self):
        class Product(BaseModel):
            sku: str
            price: int

        text = to_json({"data": (Product(sku="a", price=20),)})

        assert json.loads(text) == {"data": [{"sku": "a", "price": 20}]}

    def test_unknown_objects_fall_back_to_str(self):
        class Thing:
            def __str__(self):
                return "thing"

        assert to_json({"data": Thing()}) == '{"data":"thing"}'
