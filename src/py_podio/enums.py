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
"""Field type tags emitted by the Podio API."""

from enum import Enum


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    MONEY = "money"
    DATE = "date"
    CATEGORY = "category"
    APP = "app"
    CONTACT = "contact"
    IMAGE = "image"
    MEMBER = "member"
    PROGRESS = "progress"
    LOCATION = "location"
    VIDEO = "video"
    DURATION = "duration"
    EMBED = "embed"
    QUESTION = "question"
    TEL = "tel"  # legacy telephone field
    CALCULATION = "calculation"
    PHONE = "phone"
    EMAIL = "email"
    # Any tag not listed above; never sent by the platform itself.
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> "FieldType":
        """Look up a tag, mapping anything unrecognised to UNKNOWN."""
        if tag in _TAG_ALIASES:
            return _TAG_ALIASES[tag]
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


# Long-form spellings of the short wire tags.
_TAG_ALIASES = {
    "app-reference": FieldType.APP,
    "telephone": FieldType.TEL,
}
