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
"""Provides a class to fetch item documents from the Podio API and decode them."""

import logging
from typing import Any

import httpx

from .config import Settings
from .decoder import decode_record, decode_record_list
from .models import Record, RecordList

logger = logging.getLogger(__name__)


class PodioExtractor:
    """Fetches items from the Podio API and returns them decoded.

    Token acquisition, retries and pagination are left to the caller; HTTP
    failures are logged and raised as the underlying httpx errors.
    """

    ITEM_PATH_TEMPLATE = "/item/{item_id}"
    APP_ITEM_PATH_TEMPLATE = "/app/{app_id}/item/{app_item_id}"
    EXTERNAL_ID_PATH_TEMPLATE = "/item/app/{app_id}/external_id/{external_id}"
    FILTER_PATH_TEMPLATE = "/item/app/{app_id}/filter"

    def __init__(
        self, settings: Settings, client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the extractor with settings and an optional HTTP client."""
        self.settings = settings
        headers = {"User-Agent": "py-podio/0.1.0"}
        if settings.authorization_header:
            headers["Authorization"] = settings.authorization_header
        if client is None:
            client = httpx.AsyncClient(headers=headers, timeout=settings.timeout)
        else:
            client.headers.update(headers)
        self.client = client

    def url(self, path: str) -> str:
        """Build the full URL for an API path."""
        return f"{self.settings.api_url.rstrip('/')}{path}"

    async def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self.client.request(method, self.url(path), json=payload)
            response.raise_for_status()
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            logger.error("Podio request %s %s failed: %s", method, path, e)
            raise
        return response.json()

    async def get_item(self, item_id: int) -> Record:
        """Fetch and decode an item by its item id."""
        raw = await self._request("GET", self.ITEM_PATH_TEMPLATE.format(item_id=item_id))
        return decode_record(raw, self.settings)

    async def get_item_by_app_item_id(self, app_id: int, app_item_id: str) -> Record:
        """Fetch and decode an item by its app-local, formatted id."""
        path = self.APP_ITEM_PATH_TEMPLATE.format(app_id=app_id, app_item_id=app_item_id)
        return decode_record(await self._request("GET", path), self.settings)

    async def get_item_by_external_id(self, app_id: int, external_id: str) -> Record:
        """Fetch and decode an item by the external id set by an integration."""
        path = self.EXTERNAL_ID_PATH_TEMPLATE.format(app_id=app_id, external_id=external_id)
        return decode_record(await self._request("GET", path), self.settings)

    async def filter_items(
        self, app_id: int, filters: dict[str, Any] | None = None,
    ) -> RecordList:
        """Fetch and decode the first page of items of an app."""
        path = self.FILTER_PATH_TEMPLATE.format(app_id=app_id)
        payload = {"filters": filters} if filters else {}
        return decode_record_list(await self._request("POST", path, payload), self.settings)

    async def aclose(self) -> None:
        await self.client.aclose()
