# Copyright 2025 Gowtham Rao <rao@ohdsi.org>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for re-encoding decoded records into item documents."""

import json

import pytest

from conftest import MINIMAL_VALUES, field_block, item_document
from py_podio.decoder import decode_record
from py_podio.encoder import encode_field, encode_record, encode_value
from py_podio.values import DateValue, MoneyValue, NumberValue

pytestmark = pytest.mark.unit


def test_recorded_item_survives_re_encoding(item_fixture):
    record = decode_record(item_fixture)
    encoded = encode_record(record)

    # The encoded document is plain JSON.
    assert json.loads(json.dumps(encoded)) == encoded
    assert decode_record(encoded) == record


def test_every_variant_survives_re_encoding():
    fields = [
        field_block(tag, [MINIMAL_VALUES[tag]], field_id=index)
        for index, tag in enumerate(MINIMAL_VALUES, start=1)
    ]
    record = decode_record(item_document(fields))
    assert decode_record(encode_record(record)) == record


def test_encoded_scalars():
    assert encode_value(NumberValue(value=6513.51)) == {"value": 6513.51}
    assert encode_value(MoneyValue(value=541.987, currency="EUR")) == {
        "value": 541.987,
        "currency": "EUR",
    }


def test_encoded_date_uses_podio_layout():
    record = decode_record(item_document([field_block("date", [{"start": "2014-12-11 22:00:00"}])]))
    assert encode_value(record.fields[0].values[0]) == {"start": "2014-12-11 22:00:00"}
    assert isinstance(record.fields[0].values[0], DateValue)


def test_encoded_field_shape(item_fixture):
    record = decode_record(item_fixture)
    encoded = encode_field(record.field("category"))

    assert encoded["type"] == "category"
    assert encoded["external_id"] == "category"
    assert encoded["config"]["delta"] == 1
    assert [o["id"] for o in encoded["config"]["settings"]["options"]] == [1, 2, 3]
    assert encoded["values"] == [
        {"value": {"id": 2, "text": "B", "status": "active", "color": "DCEBD8"}}
    ]


def test_app_reference_re_encodes_nested_item():
    record = decode_record(
        item_document([field_block("app", [{"value": {"item_id": 1, "title": "Other"}}])])
    )
    encoded = encode_field(record.fields[0])
    assert encoded["values"][0]["value"]["item_id"] == 1
    assert encoded["values"][0]["value"]["fields"] == []


def test_opaque_field_re_encodes_verbatim():
    raw_values = [{"value": {"nested": [1, "two", None]}}]
    fields = [field_block("frobnicate", raw_values, settings={"knob": 11})]
    record = decode_record(item_document(fields))

    encoded = encode_field(record.fields[0])

    assert encoded["type"] == "frobnicate"
    assert encoded["values"] == raw_values
    assert encoded["config"]["settings"] == {"knob": 11}
