"""Cursor encoding and decoding.

A cursor records where a row sits in a collection's order: the value of
the sort field plus a tie-break key (row position or rowid), so a fetch
can resume strictly after it even when sort values repeat.

Format: URL-safe base64 of ``{"v": <sort value>, "k": <key>}``. Datetime
values travel as ISO strings with ``"t": "datetime"`` so they decode back
to datetimes and stay comparable with the rows they came from.
"""

import base64
import binascii
import json
from datetime import datetime
from typing import Any, Dict, Mapping

from pydantic import BaseModel, Field

from pagefeed.core.errors import InvalidCursor

DATETIME_TAG = "datetime"


class CursorData(BaseModel):
    """Decoded cursor contents"""

    value: Any = Field(description="Sort field value of the row")
    key: int = Field(description="Tie-break position of the row")

    model_config = {"frozen": True}


class CursorCodec:
    """Encode and decode opaque cursor strings."""

    @staticmethod
    def encode(data: CursorData) -> str:
        body: Dict[str, Any] = {"v": data.value, "k": data.key}
        if isinstance(data.value, datetime):
            body["v"] = data.value.isoformat()
            body["t"] = DATETIME_TAG
        payload = json.dumps(body, separators=(",", ":"))
        return base64.urlsafe_b64encode(payload.encode()).decode()

    @staticmethod
    def decode(cursor: str) -> CursorData:
        """Decode a cursor string.

        Raises:
            InvalidCursor: If the cursor is not one this codec produced
        """
        try:
            payload = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
            value = payload["v"]
            if payload.get("t") == DATETIME_TAG:
                value = datetime.fromisoformat(value)
            return CursorData(value=value, key=payload["k"])
        except (
            binascii.Error,
            UnicodeDecodeError,
            json.JSONDecodeError,
            KeyError,
            TypeError,
            AttributeError,
            ValueError,
        ) as e:
            raise InvalidCursor(f"Invalid cursor: {e}") from e

    @staticmethod
    def for_row(row: Mapping[str, Any], field: str, key: int) -> str:
        return CursorCodec.encode(CursorData(value=row.get(field), key=key))


__all__ = ["CursorCodec", "CursorData"]
