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

"""Contains functions for decoding Podio item documents into Records.

The envelope of an item is mapped directly onto `Record`. The field list is
first read as opaque field blocks; each block is then handed to
`py_podio.resolver`, and the typed fields are put back in document order.

Two error policies are offered. `decode_record` stops at the first field
that fails and raises its error. `decode_record_partial` keeps going, leaves
failed fields out of the record and returns their errors next to it.
"""

import json
import logging
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from . import resolver
from .config import Settings, settings as default_settings
from .enums import FieldType
from .errors import DecodeError, MalformedEnvelope, MaxDepthExceeded
from .models import FieldConfig, Record, RecordField, RecordList

logger = logging.getLogger(__name__)


class _FieldBlockConfig(BaseModel):
    """A field's `config` with `settings` kept undecoded."""

    settings: Any = None
    description: str | None = None
    required: bool = False
    hidden: bool = False
    hidden_create_view_edit: bool = False
    delta: int = 0


class _FieldBlock(BaseModel):
    """A field as it appears in the document, before its type is resolved."""

    model_config = ConfigDict(extra="ignore")

    field_id: int
    external_id: str = ""
    type: str
    label: str = ""
    config: _FieldBlockConfig = Field(default_factory=_FieldBlockConfig)
    values: Any = None

    @field_validator("config", mode="before")
    @classmethod
    def _null_config(cls, v: Any) -> Any:
        # Items embedded in app fields may carry "config": null.
        return {} if v is None else v


_FIELD_BLOCKS = TypeAdapter(list[_FieldBlock])


class DecodeResult(NamedTuple):
    """A record decoded with `decode_record_partial`, with its field errors."""

    record: Record
    errors: list[DecodeError]


def _parse_envelope(raw: Any) -> tuple[Record, list[_FieldBlock]]:
    if not isinstance(raw, dict):
        raise MalformedEnvelope(f"Expected an item object, got {type(raw).__name__}")
    envelope = {key: value for key, value in raw.items() if key != "fields"}
    raw_fields = raw.get("fields")
    try:
        record = Record.model_validate(envelope)
        blocks = _FIELD_BLOCKS.validate_python([] if raw_fields is None else raw_fields)
    except ValidationError as e:
        raise MalformedEnvelope(
            "Document does not have the shape of an item",
            {"item_id": raw.get("item_id"), "reason": e.errors(include_url=False, include_context=False)},
        ) from e
    return record, blocks


def _decode_field(block: _FieldBlock, config: Settings, depth: int) -> RecordField:
    values, field_settings = resolver.resolve(
        block.type, block.values, block.config.settings, config, depth
    )
    return RecordField(
        field_id=block.field_id,
        external_id=block.external_id,
        type=FieldType.from_tag(block.type),
        type_tag=block.type,
        label=block.label,
        config=FieldConfig(
            description=block.config.description,
            required=block.config.required,
            hidden=block.config.hidden,
            hidden_create_view_edit=block.config.hidden_create_view_edit,
            delta=block.config.delta,
        ),
        values=values,
        settings=field_settings,
    )


def _decode(
    raw: Any, config: Settings, depth: int, errors: list[DecodeError] | None
) -> Record:
    if depth > config.max_depth:
        raise MaxDepthExceeded(depth, config.max_depth)

    record, blocks = _parse_envelope(raw)
    fields = []
    for block in blocks:
        try:
            fields.append(_decode_field(block, config, depth))
        except DecodeError as e:
            if errors is None:
                raise
            e.details.setdefault("field_id", block.field_id)
            e.details.setdefault("external_id", block.external_id)
            logger.warning(
                "Skipping field %s (%s) of item %s: %s",
                block.external_id or block.field_id,
                block.type,
                record.item_id,
                e.message,
            )
            errors.append(e)

    logger.debug("Decoded item %s with %d fields", record.item_id, len(fields))
    return record.model_copy(update={"fields": tuple(fields)})


def decode_record(raw: Any, config: Settings | None = None, depth: int = 0) -> Record:
    """
    Decodes a single item document into a Record.

    Args:
        raw: The item as parsed JSON.
        config: Decoding settings; defaults to the environment-driven settings.
        depth: Nesting depth, incremented for items embedded in app fields.

    Returns:
        The decoded Record, with fields in document order.

    Raises:
        MalformedEnvelope: If the document is not an item.
        DecodeError: The error of the first field that fails to decode.
    """
    return _decode(raw, config or default_settings, depth, None)


def decode_record_partial(raw: Any, config: Settings | None = None) -> DecodeResult:
    """
    Decodes an item, skipping fields that fail instead of aborting.

    The returned record holds only the fields that decoded, still in document
    order. Envelope errors are raised as in `decode_record`.
    """
    errors: list[DecodeError] = []
    record = _decode(raw, config or default_settings, 0, errors)
    return DecodeResult(record, errors)


def decode_record_json(text: str | bytes, config: Settings | None = None) -> Record:
    """Parses a JSON document and decodes it with `decode_record`."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedEnvelope(f"Invalid JSON document: {e}") from e
    return decode_record(raw, config)


def decode_record_list(raw: Any, config: Settings | None = None) -> RecordList:
    """Decodes an item filter response: `{"filtered", "total", "items"}`."""
    if not isinstance(raw, dict) or not isinstance(raw.get("items", []), list):
        raise MalformedEnvelope("Expected an item list object")
    config = config or default_settings
    items = tuple(decode_record(item, config) for item in raw.get("items", []))
    try:
        return RecordList(
            filtered=raw.get("filtered", len(items)),
            total=raw.get("total", len(items)),
            items=items,
        )
    except ValidationError as e:
        raise MalformedEnvelope(
            "Item list counters are not integers",
            {"reason": e.errors(include_url=False, include_context=False)},
        ) from e
