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
"""Manages the library's configuration using Pydantic."""

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Manages configuration for decoding and fetching Podio items.

    Reads settings from environment variables with the prefix 'PODIO_'.
    """

    model_config = SettingsConfigDict(env_prefix="PODIO_")

    # Decoding behaviour
    # When True, a field type tag the client does not know raises
    # UnknownFieldType instead of being kept as an opaque value.
    strict_field_types: bool = False
    # App reference fields embed whole items; nesting beyond this is rejected.
    max_depth: int = 16

    # API access for the item extractor
    api_url: str = "https://api.podio.com"
    access_token: str | None = None
    timeout: float = 30.0

    @computed_field
    @property
    def authorization_header(self) -> str | None:
        """Construct the Authorization header value from the access token."""
        if not self.access_token:
            return None
        return f"OAuth2 {self.access_token}"


# Instantiate the settings so it can be imported directly
settings = Settings()
