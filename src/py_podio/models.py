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
"""Defines the Pydantic models for decoded Podio items.

A `Record` is built once from an item document by `py_podio.decoder` and is
never mutated afterwards. Its fields are `RecordField`s whose `values` and
`settings` have the concrete types selected by the field's type tag.
"""

from pydantic import Field

from .enums import FieldType
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
from .objects import AppSummary, ByLine, File, PodioObject, Via
from .timefmt import PodioTime
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


class AppValue(PodioObject):
    """A reference to another item, embedded as a full record."""

    value: "Record"


FieldValue = (
    TextValue
    | NumberValue
    | MoneyValue
    | DateValue
    | CategoryValue
    | AppValue
    | ContactValue
    | ImageValue
    | MemberValue
    | ProgressValue
    | LocationValue
    | VideoValue
    | DurationValue
    | EmbedValue
    | QuestionValue
    | TelephoneValue
    | CalculationValue
    | PhoneValue
    | EmailValue
    | OpaqueValue
)

FieldSettings = (
    TextSettings
    | NumberSettings
    | MoneySettings
    | DateSettings
    | CategorySettings
    | AppSettings
    | ContactSettings
    | ImageSettings
    | LocationSettings
    | DurationSettings
    | PhoneSettings
    | EmailSettings
    | CalculationSettings
    | OpaqueSettings
)


class FieldConfig(PodioObject):
    """The metadata part of a field's `config` object."""

    description: str | None = None
    required: bool = False
    hidden: bool = False
    hidden_create_view_edit: bool = False
    # Revision of the field configuration
    delta: int = 0


class RecordField(PodioObject):
    """One typed field of an item.

    Every element of `values` has the same type, chosen by `type`. For field
    types the client does not know, `type` is UNKNOWN, `type_tag` keeps the
    tag as received and the values are `OpaqueValue`s.
    """

    field_id: int
    external_id: str = ""
    type: FieldType
    type_tag: str
    label: str = ""
    config: FieldConfig = Field(default_factory=FieldConfig)
    values: tuple[FieldValue, ...] = ()
    settings: FieldSettings | None = None

    @property
    def value(self) -> FieldValue | None:
        """The first value, for single-valued fields."""
        return self.values[0] if self.values else None


class Record(PodioObject):
    """A Podio item with its fields decoded."""

    item_id: int
    app_item_id: int | None = None
    app_item_id_formatted: str | None = None
    external_id: str | None = None
    title: str = ""
    link: str | None = None
    revision: int = 0
    app: AppSummary | None = None
    fields: tuple[RecordField, ...] = ()
    files: tuple[File, ...] = ()
    created_by: ByLine | None = None
    created_on: PodioTime | None = None
    created_via: Via | None = None

    def field(self, external_id: str) -> RecordField | None:
        """Return the field with the given external id, if present."""
        for candidate in self.fields:
            if candidate.external_id == external_id:
                return candidate
        return None


class RecordList(PodioObject):
    """The result of an item filter request."""

    filtered: int = 0
    total: int = 0
    items: tuple[Record, ...] = ()


AppValue.model_rebuild()
RecordField.model_rebuild()
