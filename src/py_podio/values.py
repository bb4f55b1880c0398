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
"""Defines the element models of a field's `values` list, one per field type.

Each model mirrors the JSON object Podio sends for a single value. The app
reference value lives in `models` next to `Record`, since it embeds one.
"""

from typing import Any

from pydantic import field_validator, model_validator

from .objects import CategoryOption, Contact, Embed, File, PodioObject, RawJson
from .timefmt import PodioTime


class TextValue(PodioObject):
    value: str


class NumberValue(PodioObject):
    """A number; Podio transmits it as a decimal string such as '6513.5100'."""

    value: float


class MoneyValue(PodioObject):
    value: float
    currency: str


class DateValue(PodioObject):
    """A date or date range. A missing end means the range is open ended."""

    start: PodioTime
    end: PodioTime | None = None


class CategoryValue(PodioObject):
    value: CategoryOption


class ContactValue(PodioObject):
    value: Contact


class ImageValue(PodioObject):
    value: File


class _IntegerValue(PodioObject):
    value: int


class MemberValue(_IntegerValue):
    pass


class ProgressValue(_IntegerValue):
    """Progress in percent, 0 to 100."""


class VideoValue(_IntegerValue):
    pass


class DurationValue(_IntegerValue):
    """Duration in seconds."""


class QuestionValue(_IntegerValue):
    pass


class LocationValue(PodioObject):
    """A location, either a free-text address or structured address parts.

    Podio has been observed sending coordinates both as JSON numbers and as
    strings; both are normalised to float.
    """

    value: str | None = None
    formatted: str | None = None
    street_number: str | None = None
    street_name: str | None = None
    postal_code: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    lat: float | None = None
    lng: float | None = None

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _blank_coordinate(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _has_location(self) -> "LocationValue":
        if all(value is None for value in self.__dict__.values()):
            raise ValueError("location has neither an address nor coordinates")
        return self


class EmbedValue(PodioObject):
    embed: Embed
    file: File | None = None


class _ContactPointValue(PodioObject):
    value: str
    type: str = "other"


class _PhoneNumberValue(_ContactPointValue):
    # Older apps send the number as a JSON integer.
    @field_validator("value", mode="before")
    @classmethod
    def _stringify_number(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return v
        if isinstance(v, int):
            return str(v)
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return v


class TelephoneValue(_PhoneNumberValue):
    """Legacy phone field."""


class PhoneValue(_PhoneNumberValue):
    pass


class EmailValue(_ContactPointValue):
    pass


class CalculationValue(PodioObject):
    """The server-computed result of a calculation field.

    The value is stored as received and never recomputed on the client.
    """

    # The key is required; null means the calculation has no result yet.
    value: float | str | None

    @property
    def number(self) -> float | None:
        """The value as a float, for calculations returning numbers."""
        if self.value is None:
            return None
        return float(self.value)


class OpaqueValue(PodioObject):
    """A value of a field type the client does not know.

    Keeps the raw tag and payload so it can be inspected or re-serialised.
    """

    type_tag: str
    data: RawJson = None
