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
"""Defines the Pydantic models for Podio objects shared across items and fields."""

import copy
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .timefmt import PodioTime

# Undecoded JSON kept on a model; copied so it never aliases the input document.
RawJson = Annotated[Any, BeforeValidator(copy.deepcopy)]


class PodioObject(BaseModel):
    """Base for all decoded Podio objects.

    Instances are immutable and keys the model does not declare are dropped.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")


class File(PodioObject):
    """A file hosted by Podio, attached to an item or used as an image."""

    file_id: int
    name: str = ""
    link: str | None = None
    size: int | None = None
    mimetype: str | None = None


class Embed(PodioObject):
    """Metadata Podio scraped for an embedded link."""

    embed_id: int
    type: str = "link"
    title: str | None = None
    description: str | None = None
    embed_html: str | None = None
    url: str | None = None
    original_url: str | None = None
    resolved_url: str | None = None
    hostname: str | None = None
    embed_height: int | None = None
    embed_width: int | None = None


class Contact(PodioObject):
    """A user or space contact referenced from a contact field."""

    profile_id: int
    user_id: int | None = None
    space_id: int | None = None
    org_id: int | None = None
    type: str = "user"
    name: str = ""
    link: str | None = None
    avatar: int | None = None
    image: File | None = None
    last_seen_on: PodioTime | None = None


class ByLine(PodioObject):
    """Describes who created a Podio object."""

    id: int
    type: str = "user"
    name: str = ""
    url: str | None = None
    avatar_type: str | None = None
    avatar_id: int | None = None
    image: File | None = None
    last_seen_on: PodioTime | None = None
    # Deprecated by Podio in favour of avatar_id.
    avatar: int | None = None


class Via(PodioObject):
    """Describes the client a Podio object was created through."""

    id: int
    name: str = ""
    url: str | None = None
    display: bool = False


class AppSummary(PodioObject):
    """The short app description embedded in an item."""

    app_id: int
    url_label: str | None = None
    link: str | None = None
    status: str | None = None


class CategoryOption(PodioObject):
    """One selectable option of a category field."""

    id: int
    text: str = ""
    status: str = "active"
    color: str | None = None


class ReferencedApp(PodioObject):
    """An app whose items an app reference field may point to."""

    app_id: int
    view_id: int | None = Field(default=None, description="View used to filter candidates.")
