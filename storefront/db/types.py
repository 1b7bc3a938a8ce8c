"""Custom SQLAlchemy types used by the persistence layer."""
from __future__ import annotations

import json
from typing import Iterable, List

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import JSON, Text, TypeDecorator


class StringList(TypeDecorator[List[str]]):
    """Store a list of strings as a native Postgres ``TEXT[]``.

    Falls back to JSON storage on dialects without array support
    (e.g. SQLite during unit tests).
    """

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.ARRAY(Text))
        return dialect.type_descriptor(JSON(none_as_null=True))

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        if isinstance(value, str):
            raise TypeError("StringList expects an iterable of strings, got a bare str")
        if not isinstance(value, Iterable):
            raise TypeError(
                f"StringList expects an iterable of strings, got {type(value)!r}"
            )
        return [str(v) for v in value]

    def process_result_value(self, value, dialect):  # type: ignore[override]
        if value is None:
            return []
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError:
                # Postgres array literal "{a,b}" when the driver does not decode it
                stripped = value.strip("{}")
                return [part.strip('"') for part in stripped.split(",")] if stripped else []
            return [str(v) for v in parsed] if isinstance(parsed, list) else []
        return [str(v) for v in value]

    def copy(self, **kwargs):  # type: ignore[override]
        return StringList()
