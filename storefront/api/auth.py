"""
Authentication helpers and identity resolution.

Parses auth-proxy headers, normalizes emails, and upserts users while
supporting admin elevation via the ``ADMIN_EMAILS`` environment variable.
"""
import os
from typing import Optional, Tuple
from sqlalchemy.orm import Session

from storefront.db import models, schemas, storage


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


def _normalize_list_env(var_name: str) -> set:
    raw = os.getenv(var_name, "")
    values = set()
    for entry in raw.split(","):
        cleaned = entry.strip().strip('"').strip("'")
        if cleaned:
            values.add(cleaned.lower())
    return values


def _admin_emails() -> set:
    return _normalize_list_env("ADMIN_EMAILS")


def is_admin_email(email: Optional[str]) -> bool:
    if not email:
        return False
    return _normalize_email(email) in _admin_emails()


def resolve_identity_from_headers(
    x_auth_request_user: Optional[str],
    x_auth_request_email: Optional[str],
    x_forwarded_user: Optional[str],
    x_forwarded_email: Optional[str],
) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(subject, email)``; the email doubles as subject when no user id is sent."""
    email = _normalize_email(x_auth_request_email or x_forwarded_email)
    subject = (x_auth_request_user or x_forwarded_user or "").strip() or email
    return subject, email


def _split_name(display_name: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    if not display_name:
        return None, None
    parts = display_name.strip().split(None, 1)
    if not parts:
        return None, None
    return parts[0], (parts[1] if len(parts) > 1 else None)


def get_or_create_user(
    db: Session,
    user_id: str,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
) -> models.User:
    """Return the account for ``user_id``, falling back to the one owning ``email``.

    Raises ``IntegrityError`` when an existing account switches to an email
    another account already uses.
    """
    user = storage.get_user(db, user_id)
    if user is None and email:
        # Same shopper reaching us under another subject (e.g. an email-only proxy header)
        user = storage.get_user_by_email(db, email)
    if user is None:
        first_name, last_name = _split_name(display_name)
        if first_name is None and email:
            first_name = email.split("@")[0]
        user = storage.upsert_user(
            db,
            schemas.UserUpsert(id=user_id, email=email, first_name=first_name, last_name=last_name),
        )
    elif email and user.email != email:
        user = storage.upsert_user(db, schemas.UserUpsert(id=user.id, email=email))

    # The admin flag follows ADMIN_EMAILS in both directions
    should_be_admin = is_admin_email(user.email)
    if bool(user.is_admin) != should_be_admin:
        user = storage.set_admin(db, user.id, should_be_admin)
    return user
