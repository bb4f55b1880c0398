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
"""Defines the models for a field's `config.settings` object.

Only field types with type-specific configuration have a settings model;
the rest carry no settings at all.
"""

from .objects import CategoryOption, PodioObject, RawJson, ReferencedApp


class TextSettings(PodioObject):
    format: str = "plain"
    size: str = "large"


class NumberSettings(PodioObject):
    decimals: int = 0
    unit: str | None = None


class MoneySettings(PodioObject):
    allowed_currencies: tuple[str, ...] = ()


class DateSettings(PodioObject):
    """Calendar, time and end-date switches of a date field.

    `end` and `time` take the values 'enabled', 'disabled' or 'required'.
    """

    calendar: bool = False
    end: str = "disabled"
    time: str = "enabled"


class CategorySettings(PodioObject):
    display: str = "inline"
    multiple: bool = False
    options: tuple[CategoryOption, ...] = ()

    def option(self, option_id: int) -> CategoryOption | None:
        """Return the option with the given id, if the field defines one."""
        for candidate in self.options:
            if candidate.id == option_id:
                return candidate
        return None


class AppSettings(PodioObject):
    referenced_apps: tuple[ReferencedApp, ...] = ()
    multiple: bool = True

    @property
    def app_ids(self) -> tuple[int, ...]:
        return tuple(app.app_id for app in self.referenced_apps)


class ContactSettings(PodioObject):
    type: str = "space_users"
    valid_types: tuple[str, ...] = ()


class ImageSettings(PodioObject):
    allowed_mimetypes: tuple[str, ...] = ()


class LocationSettings(PodioObject):
    has_map: bool = False
    structured: bool = False


class DurationSettings(PodioObject):
    # Subset of 'days', 'hours', 'minutes', 'seconds'
    fields: tuple[str, ...] = ()


class PhoneSettings(PodioObject):
    possible_types: tuple[str, ...] = ()


class EmailSettings(PodioObject):
    possible_types: tuple[str, ...] = ()
    include_in_cc: bool = False


class CalculationSettings(PodioObject):
    """The script behind a calculation field and the type it returns.

    The script runs on Podio's servers only.
    """

    script: str | None = None
    expression: RawJson = None
    return_type: str = "text"
    decimals: int | None = None
    unit: str | None = None


class OpaqueSettings(PodioObject):
    """Settings of a field type the client does not know."""

    type_tag: str
    data: RawJson = None
