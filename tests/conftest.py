"""Shared fixtures and payload builders for the py_podio tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from py_podio.config import Settings

FIXTURES = Path(__file__).parent / "fixtures"

# One well-formed `values` element per known field type.
MINIMAL_VALUES: dict[str, dict[str, Any]] = {
    "text": {"value": "a"},
    "number": {"value": "1.5"},
    "money": {"value": "10", "currency": "USD"},
    "date": {"start": "2014-12-11 22:00:00"},
    "category": {"value": {"id": 1, "text": "A", "status": "active", "color": "DCEBD8"}},
    "app": {"value": {"item_id": 1, "title": "Referenced"}},
    "contact": {"value": {"profile_id": 7, "name": "Jane Doe"}},
    "image": {"value": {"file_id": 9, "name": "logo.png"}},
    "member": {"value": 3},
    "progress": {"value": 50},
    "location": {"value": "Copenhagen, Denmark", "lat": "55.6761", "lng": 12.5683},
    "video": {"value": 11},
    "duration": {"value": 3600},
    "embed": {"embed": {"embed_id": 1, "url": "http://example.com/"}, "file": None},
    "question": {"value": 2},
    "tel": {"value": 4512345678, "type": "work"},
    "calculation": {"value": "12.5000"},
    "phone": {"value": "+45 1234 5678", "type": "mobile"},
    "email": {"value": "jane@example.com", "type": "work"},
}


def field_block(
    type_tag: str,
    values: list[Any] | None = None,
    settings: Any = None,
    field_id: int = 1,
    external_id: str | None = None,
) -> dict[str, Any]:
    """Build a field as it appears in an item document."""
    return {
        "field_id": field_id,
        "external_id": external_id or f"{type_tag}-{field_id}",
        "type": type_tag,
        "label": type_tag.title(),
        "config": {"settings": settings, "required": False, "hidden": False, "delta": 0},
        "values": values if values is not None else [],
    }


def item_document(fields: list[dict[str, Any]], item_id: int = 42) -> dict[str, Any]:
    """Build a minimal item document around the given fields."""
    return {"item_id": item_id, "title": f"Item {item_id}", "revision": 1, "fields": fields}


@pytest.fixture
def lenient_settings() -> Settings:
    return Settings(strict_field_types=False)


@pytest.fixture
def strict_settings() -> Settings:
    return Settings(strict_field_types=True)


@pytest.fixture
def item_fixture() -> dict[str, Any]:
    """The item document recorded from the Podio API."""
    return json.loads((FIXTURES / "item_225607452.json").read_text(encoding="utf-8"))
