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
"""Exceptions raised while decoding Podio documents.

None of these derive from ValueError, so when they are raised inside a
pydantic validator they propagate unchanged instead of being folded into a
pydantic ValidationError.
"""

from typing import Any


class DecodeError(Exception):
    """Base error for everything that can go wrong while decoding an item."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message, "kind": type(self).__name__}
        if self.details:
            result["details"] = self.details
        return result


class MalformedEnvelope(DecodeError):
    """The top-level document does not have the shape of an item."""


class MaxDepthExceeded(MalformedEnvelope):
    """App reference items are nested deeper than the configured limit."""

    def __init__(self, depth: int, max_depth: int):
        super().__init__(
            f"Item nesting depth {depth} exceeds the limit of {max_depth}",
            {"depth": depth, "max_depth": max_depth},
        )
        self.depth = depth
        self.max_depth = max_depth


class SchemaMismatch(DecodeError):
    """A field payload does not fit the schema selected by its type tag."""

    def __init__(self, type_tag: str, raw: Any, schema: str, reason: Any = None):
        details: dict[str, Any] = {"type": type_tag, "schema": schema, "raw": raw}
        if reason is not None:
            details["reason"] = reason
        super().__init__(
            f"Payload for field type '{type_tag}' does not match {schema}", details
        )
        self.type_tag = type_tag
        self.raw = raw
        self.schema = schema


class UnknownFieldType(DecodeError):
    """A field type tag is not known to the client (strict mode only)."""

    def __init__(self, type_tag: str):
        super().__init__(f"Unknown field type '{type_tag}'", {"type": type_tag})
        self.type_tag = type_tag


class TimeFormatError(DecodeError):
    """A timestamp does not follow the 'YYYY-MM-DD HH:MM:SS' layout."""

    def __init__(self, text: Any):
        super().__init__(f"Invalid Podio timestamp: {text!r}", {"value": text})
        self.text = text
