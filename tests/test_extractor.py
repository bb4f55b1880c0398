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

import httpx
import pytest
from pytest_httpx import HTTPXMock

from py_podio.config import Settings
from py_podio.errors import SchemaMismatch
from py_podio.extractor import PodioExtractor

API_URL = "https://api.podio.test"


@pytest.fixture
def mock_settings() -> Settings:
    """Fixture for settings pointing at a fake API host."""
    return Settings(api_url=API_URL, access_token="secret-token")


@pytest.mark.asyncio
async def test_get_item(mock_settings: Settings, httpx_mock: HTTPXMock, item_fixture):
    """
    Tests that an item is fetched with the OAuth2 header and returned decoded.
    """
    httpx_mock.add_response(
        method="GET",
        url=f"{API_URL}/item/225607452",
        match_headers={"Authorization": "OAuth2 secret-token"},
        json=item_fixture,
    )

    async with httpx.AsyncClient() as client:
        extractor = PodioExtractor(settings=mock_settings, client=client)
        record = await extractor.get_item(225607452)

    assert record.item_id == 225607452
    assert record.field("money").values[0].currency == "EUR"


@pytest.mark.asyncio
async def test_get_item_by_app_item_id(mock_settings: Settings, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="GET",
        url=f"{API_URL}/app/10354401/item/3",
        json={"item_id": 225607452, "app_item_id": 3, "title": "Title"},
    )

    async with httpx.AsyncClient() as client:
        extractor = PodioExtractor(settings=mock_settings, client=client)
        record = await extractor.get_item_by_app_item_id(10354401, "3")

    assert record.app_item_id == 3


@pytest.mark.asyncio
async def test_get_item_by_external_id(mock_settings: Settings, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="GET",
        url=f"{API_URL}/item/app/10354401/external_id/crm-17",
        json={"item_id": 8, "external_id": "crm-17"},
    )

    async with httpx.AsyncClient() as client:
        extractor = PodioExtractor(settings=mock_settings, client=client)
        record = await extractor.get_item_by_external_id(10354401, "crm-17")

    assert record.external_id == "crm-17"


@pytest.mark.asyncio
async def test_filter_items(mock_settings: Settings, httpx_mock: HTTPXMock, item_fixture):
    httpx_mock.add_response(
        method="POST",
        url=f"{API_URL}/item/app/10354401/filter",
        match_json={"filters": {"category": [2]}},
        json={"filtered": 1, "total": 3, "items": [item_fixture]},
    )

    async with httpx.AsyncClient() as client:
        extractor = PodioExtractor(settings=mock_settings, client=client)
        result = await extractor.filter_items(10354401, filters={"category": [2]})

    assert result.total == 3
    assert result.items[0].title == "Title"


@pytest.mark.asyncio
async def test_http_error_is_raised(mock_settings: Settings, httpx_mock: HTTPXMock, caplog):
    """
    Tests that HTTP errors are logged and propagate unchanged.
    """
    httpx_mock.add_response(method="GET", url=f"{API_URL}/item/1", status_code=404)

    async with httpx.AsyncClient() as client:
        extractor = PodioExtractor(settings=mock_settings, client=client)
        with pytest.raises(httpx.HTTPStatusError):
            await extractor.get_item(1)

    assert "404" in caplog.text


@pytest.mark.asyncio
async def test_decode_errors_propagate(mock_settings: Settings, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="GET",
        url=f"{API_URL}/item/1",
        json={"item_id": 1, "fields": [{"field_id": 1, "type": "number", "values": [{"value": "x"}]}]},
    )

    async with httpx.AsyncClient() as client:
        extractor = PodioExtractor(settings=mock_settings, client=client)
        with pytest.raises(SchemaMismatch):
            await extractor.get_item(1)


def test_extractor_without_token_sends_no_authorization():
    extractor = PodioExtractor(settings=Settings(api_url=API_URL, access_token=None))
    assert "Authorization" not in extractor.client.headers
    assert extractor.url("/item/1") == f"{API_URL}/item/1"
