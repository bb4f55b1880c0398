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
"""Parses and formats timestamps in the Podio wire format.

Podio sends timestamps as 'YYYY-MM-DD HH:MM:SS' without an offset; they are
always UTC. Some endpoints send the four-character string 'null' instead of
a JSON null, which decodes to NULL_TIME.
"""

import re
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from .errors import TimeFormatError

PODIO_LAYOUT = "%Y-%m-%d %H:%M:%S"
NULL_TOKEN = "null"

# Equivalent of Go's zero time, which is what the platform's null token means.
NULL_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_LAYOUT_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def parse_time(text: str) -> datetime:
    """
    Parses a Podio timestamp into an aware UTC datetime.

    Args:
        text: The timestamp text, without surrounding JSON quotes.

    Returns:
        The parsed datetime, or NULL_TIME for the 'null' token.

    Raises:
        TimeFormatError: If the text is neither the layout nor the null token.
    """
    if text == NULL_TOKEN:
        return NULL_TIME
    if not isinstance(text, str) or not _LAYOUT_RE.fullmatch(text):
        raise TimeFormatError(text)
    try:
        parsed = datetime.strptime(text, PODIO_LAYOUT)
    except ValueError:
        # Matches the layout but is not a real date, e.g. month 13.
        raise TimeFormatError(text) from None
    return parsed.replace(tzinfo=timezone.utc)


def format_time(value: datetime) -> str:
    """Formats a datetime in the Podio layout, normalised to UTC."""
    if is_null_time(value):
        return NULL_TOKEN
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    # strftime does not zero-pad years below 1000 on every platform.
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def is_null_time(value: datetime) -> bool:
    """Check if a datetime is the null sentinel."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value == NULL_TIME


def _validate_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return parse_time(value)


# Use as a pydantic field type; combine with `| None` for JSON null.
PodioTime = Annotated[
    datetime,
    BeforeValidator(_validate_time),
    PlainSerializer(format_time, return_type=str, when_used="json"),
]
