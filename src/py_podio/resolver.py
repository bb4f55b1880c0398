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
"""Resolves a field's raw `values` and `settings` into typed models.

The type tag selects an entry of VARIANT_SCHEMAS, which names the model for
each element of `values` and the model for `config.settings`. App reference
values embed whole items and are handed back to the record decoder, so this
module and `py_podio.decoder` call each other.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, NamedTuple

from pydantic import BaseModel, ValidationError

from . import decoder
from .config import Settings, settings as default_settings
from .enums import FieldType
from .errors import MalformedEnvelope, MaxDepthExceeded, SchemaMismatch, UnknownFieldType
from .field_settings import (
    AppSettings,
    CalculationSettings,
    CategorySettings,
    ContactSettings,
    DateSettings,
    DurationSettings,
    EmailSettings,
    ImageSettings,
    LocationSettings,
    MoneySettings,
    NumberSettings,
    OpaqueSettings,
    PhoneSettings,
    TextSettings,
)
from .models import AppValue, FieldSettings, FieldValue
from .values import (
    CalculationValue,
    CategoryValue,
    ContactValue,
    DateValue,
    DurationValue,
    EmailValue,
    EmbedValue,
    ImageValue,
    LocationValue,
    MemberValue,
    MoneyValue,
    NumberValue,
    OpaqueValue,
    PhoneValue,
    ProgressValue,
    QuestionValue,
    TelephoneValue,
    TextValue,
    VideoValue,
)

logger = logging.getLogger(__name__)


class VariantSchema(NamedTuple):
    value_type: type[BaseModel]
    settings_type: type[BaseModel] | None


VARIANT_SCHEMAS: Mapping[FieldType, VariantSchema] = MappingProxyType(
    {
        FieldType.TEXT: VariantSchema(TextValue, TextSettings),
        FieldType.NUMBER: VariantSchema(NumberValue, NumberSettings),
        FieldType.MONEY: VariantSchema(MoneyValue, MoneySettings),
        FieldType.DATE: VariantSchema(DateValue, DateSettings),
        FieldType.CATEGORY: VariantSchema(CategoryValue, CategorySettings),
        FieldType.APP: VariantSchema(AppValue, AppSettings),
        FieldType.CONTACT: VariantSchema(ContactValue, ContactSettings),
        FieldType.IMAGE: VariantSchema(ImageValue, ImageSettings),
        FieldType.MEMBER: VariantSchema(MemberValue, None),
        FieldType.PROGRESS: VariantSchema(ProgressValue, None),
        FieldType.LOCATION: VariantSchema(LocationValue, LocationSettings),
        FieldType.VIDEO: VariantSchema(VideoValue, None),
        FieldType.DURATION: VariantSchema(DurationValue, DurationSettings),
        FieldType.EMBED: VariantSchema(EmbedValue, None),
        FieldType.QUESTION: VariantSchema(QuestionValue, None),
        FieldType.TEL: VariantSchema(TelephoneValue, None),
        FieldType.CALCULATION: VariantSchema(CalculationValue, CalculationSettings),
        FieldType.PHONE: VariantSchema(PhoneValue, PhoneSettings),
        FieldType.EMAIL: VariantSchema(EmailValue, EmailSettings),
    }
)


def _validation_reason(exc: ValidationError) -> list[dict[str, Any]]:
    return exc.errors(include_url=False, include_context=False)


def _decode_app_value(raw: Any, config: Settings, depth: int) -> AppValue:
    if not isinstance(raw, dict) or not isinstance(raw.get("value"), dict):
        raise SchemaMismatch(FieldType.APP.value, raw, AppValue.__name__)
    try:
        record = decoder.decode_record(raw["value"], config, depth + 1)
    except MaxDepthExceeded:
        raise
    except MalformedEnvelope as e:
        raise SchemaMismatch(FieldType.APP.value, raw, AppValue.__name__, e.message) from e
    return AppValue(value=record)


def _decode_value(
    field_type: FieldType, schema: VariantSchema, raw: Any, config: Settings, depth: int
) -> FieldValue:
    if field_type is FieldType.APP:
        return _decode_app_value(raw, config, depth)
    try:
        return schema.value_type.model_validate(raw)
    except ValidationError as e:
        raise SchemaMismatch(
            field_type.value, raw, schema.value_type.__name__, _validation_reason(e)
        ) from e


def _decode_settings(
    field_type: FieldType, schema: VariantSchema, raw_settings: Any
) -> FieldSettings | None:
    if raw_settings is None or schema.settings_type is None:
        return None
    try:
        return schema.settings_type.model_validate(raw_settings)
    except ValidationError as e:
        raise SchemaMismatch(
            field_type.value,
            raw_settings,
            schema.settings_type.__name__,
            _validation_reason(e),
        ) from e


def _check_category_options(
    values: tuple[FieldValue, ...], field_settings: FieldSettings | None, raw_values: Any
) -> None:
    """Every selected option must be one the field's settings define."""
    if not isinstance(field_settings, CategorySettings):
        return
    for value in values:
        if field_settings.option(value.value.id) is None:
            raise SchemaMismatch(
                FieldType.CATEGORY.value,
                raw_values,
                CategoryValue.__name__,
                f"option id {value.value.id} is not defined in the field settings",
            )


def _resolve_opaque(
    type_tag: str, raw_values: list[Any], raw_settings: Any
) -> tuple[tuple[FieldValue, ...], FieldSettings | None]:
    values = tuple(OpaqueValue(type_tag=type_tag, data=raw) for raw in raw_values)
    field_settings = None
    if raw_settings is not None:
        field_settings = OpaqueSettings(type_tag=type_tag, data=raw_settings)
    return values, field_settings


def resolve(
    type_tag: str,
    raw_values: Any,
    raw_settings: Any,
    config: Settings | None = None,
    depth: int = 0,
) -> tuple[tuple[FieldValue, ...], FieldSettings | None]:
    """
    Decodes one field's values and settings according to its type tag.

    Args:
        type_tag: The field's `type` as sent by Podio.
        raw_values: The field's `values` list, undecoded.
        raw_settings: The field's `config.settings` object, undecoded.
        config: Decoding settings; defaults to the environment-driven settings.
        depth: Nesting depth of the item that owns this field.

    Returns:
        The typed values, in order, and the typed settings or None.

    Raises:
        UnknownFieldType: For an unrecognised tag when strict_field_types is set.
        SchemaMismatch: If the values or settings do not fit the tag's schema.
    """
    config = config or default_settings
    if raw_values is None:
        raw_values = []
    elif not isinstance(raw_values, list):
        raise SchemaMismatch(type_tag, raw_values, "list")

    field_type = FieldType.from_tag(type_tag)
    if field_type is FieldType.UNKNOWN:
        if config.strict_field_types:
            raise UnknownFieldType(type_tag)
        logger.warning("Unknown field type %r; keeping its payload undecoded.", type_tag)
        return _resolve_opaque(type_tag, raw_values, raw_settings)

    schema = VARIANT_SCHEMAS[field_type]
    values = tuple(
        _decode_value(field_type, schema, raw, config, depth) for raw in raw_values
    )
    field_settings = _decode_settings(field_type, schema, raw_settings)
    _check_category_options(values, field_settings, raw_values)
    return values, field_settings
