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
"""Serializes decoded Records back into Podio's item document shape.

The output of `encode_record` decodes to an equal Record.
"""

from typing import Any

from .field_settings import OpaqueSettings
from .models import AppValue, FieldValue, Record, RecordField
from .values import OpaqueValue


def encode_value(value: FieldValue) -> Any:
    """Encodes one element of a field's `values` list."""
    if isinstance(value, OpaqueValue):
        return value.data
    if isinstance(value, AppValue):
        return {"value": encode_record(value.value)}
    return value.model_dump(mode="json", exclude_none=True)


def encode_field(field: RecordField) -> dict[str, Any]:
    """Encodes a field, nesting its settings under `config` as Podio does."""
    config = field.config.model_dump(mode="json", exclude_none=True)
    if isinstance(field.settings, OpaqueSettings):
        config["settings"] = field.settings.data
    elif field.settings is not None:
        config["settings"] = field.settings.model_dump(mode="json", exclude_none=True)
    else:
        config["settings"] = None
    return {
        "field_id": field.field_id,
        "external_id": field.external_id,
        "type": field.type_tag,
        "label": field.label,
        "config": config,
        "values": [encode_value(value) for value in field.values],
    }


def encode_record(record: Record) -> dict[str, Any]:
    """Encodes a Record as an item document."""
    data = record.model_dump(mode="json", exclude={"fields"}, exclude_none=True)
    data["fields"] = [encode_field(field) for field in record.fields]
    return data
