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
"""Command-line entry point for decoding and fetching Podio items."""

import asyncio
import json
import logging
from pathlib import Path

import httpx
import typer

from .config import Settings
from .decoder import decode_record, decode_record_partial
from .encoder import encode_record
from .errors import DecodeError
from .extractor import PodioExtractor
from .models import AppValue, FieldValue, Record, RecordField
from .timefmt import format_time
from .values import (
    CategoryValue,
    ContactValue,
    DateValue,
    EmbedValue,
    ImageValue,
    LocationValue,
    MoneyValue,
    OpaqueValue,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Decode Podio item documents into typed records.")


def render_value(value: FieldValue) -> str:
    """Render a single field value as short human-readable text."""
    if isinstance(value, AppValue):
        return f"#{value.value.item_id} {value.value.title}".rstrip()
    if isinstance(value, CategoryValue):
        return value.value.text
    if isinstance(value, ContactValue):
        return value.value.name
    if isinstance(value, ImageValue):
        return value.value.name or str(value.value.file_id)
    if isinstance(value, MoneyValue):
        return f"{value.value} {value.currency}"
    if isinstance(value, DateValue):
        start = format_time(value.start) if value.start else ""
        if value.end:
            return f"{start} - {format_time(value.end)}"
        return start
    if isinstance(value, LocationValue):
        return value.formatted or value.value or f"{value.lat},{value.lng}"
    if isinstance(value, EmbedValue):
        return value.embed.url or value.embed.original_url or ""
    if isinstance(value, OpaqueValue):
        return json.dumps(value.data, default=str)
    return str(value.value)


def render_field(field: RecordField) -> str:
    rendered = ", ".join(render_value(value) for value in field.values)
    return f"{field.external_id or field.field_id}\t{field.type_tag}\t{rendered}"


def _print_record(record: Record, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(encode_record(record), indent=2))
        return
    typer.echo(f"Item {record.item_id}: {record.title}")
    for field in record.fields:
        typer.echo(render_field(field))


@app.command()
def decode(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Item JSON file."),
    strict: bool = typer.Option(False, help="Fail on unknown field types."),
    partial: bool = typer.Option(False, help="Skip fields that fail to decode."),
    as_json: bool = typer.Option(False, "--json", help="Print the re-encoded item."),
):
    """Decode an item document stored in a file."""
    config = Settings(strict_field_types=strict)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON in {path}: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        if partial:
            record, errors = decode_record_partial(raw, config)
            for error in errors:
                typer.echo(json.dumps(error.to_dict(), default=str), err=True)
        else:
            record = decode_record(raw, config)
    except DecodeError as e:
        typer.echo(json.dumps(e.to_dict(), default=str), err=True)
        raise typer.Exit(code=1)

    _print_record(record, as_json)


async def _fetch(item_id: int, config: Settings) -> Record:
    extractor = PodioExtractor(config)
    try:
        return await extractor.get_item(item_id)
    finally:
        await extractor.aclose()


@app.command()
def fetch(
    item_id: int = typer.Argument(..., help="Podio item id."),
    strict: bool = typer.Option(False, help="Fail on unknown field types."),
    as_json: bool = typer.Option(False, "--json", help="Print the re-encoded item."),
):
    """Fetch an item from the Podio API and decode it.

    The access token is read from the PODIO_ACCESS_TOKEN environment variable.
    """
    config = Settings(strict_field_types=strict)
    try:
        record = asyncio.run(_fetch(item_id, config))
    except (httpx.RequestError, httpx.HTTPStatusError) as e:
        typer.echo(f"Request failed: {e}", err=True)
        raise typer.Exit(code=1)
    except DecodeError as e:
        typer.echo(json.dumps(e.to_dict(), default=str), err=True)
        raise typer.Exit(code=1)

    _print_record(record, as_json)


def main():
    app()


if __name__ == "__main__":
    main()
