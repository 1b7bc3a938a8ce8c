"""SQLite compilation shims for PostgreSQL-specific SQLAlchemy types.

This module installs lightweight compilers for JSONB when the active dialect
is SQLite so that declarative metadata can be created in test runs that
substitute an in-memory SQLite database. The goal is only to allow
`Base.metadata.create_all()` to succeed; no attempt is made to fully emulate
PostgreSQL JSONB behavior.

Usage: Imported for side-effects by storefront.db.models.
"""
from __future__ import annotations

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.compiler import compiles

# Only register compilers if SQLAlchemy is asked to compile for SQLite.
# These functions are ignored for other dialects.

@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(element, compiler, **kw):  # pragma: no cover - trivial
    # Map JSONB to a generic JSON (stored as TEXT) for SQLite. This loses
    # JSONB operators and indexing capabilities but preserves storage so
    # tests can insert and retrieve shipping addresses and audit metadata.
    return "JSON"
