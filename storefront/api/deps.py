"""
API dependency helpers.

Resolves the shopper behind a request, either from auth-proxy headers or, on a
developer machine, as the fixed development shopper.
"""
import os
from typing import Optional, Tuple, Dict, Any
from urllib.parse import urlparse

from fastapi import Header, HTTPException, status, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.db import models
from storefront.db.database import get_db
from storefront.api.auth import resolve_identity_from_headers, get_or_create_user

DEV_USER_ID = "dev-user"
DEV_USER_EMAIL = "dev@localhost"

_LOCAL_STOREFRONT_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class DevShopperNotAllowed(RuntimeError):
    """DEV_MODE was switched on for a storefront that is not running locally."""


def dev_mode_requested() -> bool:
    return os.getenv("DEV_MODE", "false").lower() == "true"


def _storefront_host() -> Optional[str]:
    base_url = (os.getenv("APP_BASE_URL") or "").strip()
    if not base_url:
        return None
    if "://" not in base_url:
        base_url = f"http://{base_url}"
    return urlparse(base_url).hostname


def _dev_hosts() -> set:
    hosts = set(_LOCAL_STOREFRONT_HOSTS)
    for host in os.getenv("DEV_MODE_ALLOWED_HOSTS", "").split(","):
        if host.strip():
            hosts.add(host.strip().lower())
    return hosts


def dev_shopper_enabled() -> bool:
    """True when every request should act as the development shopper.

    The storefront must be served from a local (or explicitly listed) host;
    without ``APP_BASE_URL`` the operator has to opt in with ``ALLOW_DEV_MODE``.
    """
    if not dev_mode_requested():
        return False
    host = _storefront_host()
    if host is None:
        if os.getenv("ALLOW_DEV_MODE", "false").lower() != "true" and not os.getenv("PYTEST_CURRENT_TEST"):
            raise DevShopperNotAllowed("DEV_MODE=true needs a localhost APP_BASE_URL or ALLOW_DEV_MODE=true")
        return True
    if host.lower() not in _dev_hosts():
        raise DevShopperNotAllowed(
            f"DEV_MODE=true would expose the development shopper on '{host}'; "
            "add the host to DEV_MODE_ALLOWED_HOSTS to allow it"
        )
    return True


# Contract:
# Returns (sqlalchemy User model, current_user_context_dict)
# Raises 401 if identity cannot be resolved.


def _context_for(user: models.User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "is_admin": bool(getattr(user, "is_admin", False)),
    }


def _resolve_user(
    db: Session,
    x_auth_request_user: Optional[str],
    x_auth_request_email: Optional[str],
    x_forwarded_user: Optional[str],
    x_forwarded_email: Optional[str],
) -> Optional[models.User]:
    if dev_shopper_enabled():
        return get_or_create_user(db, DEV_USER_ID, email=DEV_USER_EMAIL, display_name="Development User")
    subject, email = resolve_identity_from_headers(
        x_auth_request_user=x_auth_request_user,
        x_auth_request_email=x_auth_request_email,
        x_forwarded_user=x_forwarded_user,
        x_forwarded_email=x_forwarded_email,
    )
    if not subject:
        return None
    try:
        return get_or_create_user(db, subject, email=email)
    except IntegrityError:
        # The email already belongs to a different account
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already linked to another account",
        )


def get_current_user_context(
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> Tuple[models.User, Dict[str, Any]]:
    user = _resolve_user(db, x_auth_request_user, x_auth_request_email, x_forwarded_user, x_forwarded_email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user, _context_for(user)


def get_optional_user_context(
    db: Session = Depends(get_db),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> Optional[Tuple[models.User, Dict[str, Any]]]:
    user = _resolve_user(db, x_auth_request_user, x_auth_request_email, x_forwarded_user, x_forwarded_email)
    if user is None:
        return None
    return user, _context_for(user)


def require_admin(
    user_context = Depends(get_current_user_context),
) -> Tuple[models.User, Dict[str, Any]]:
    _user, current_user = user_context
    if not current_user.get("is_admin"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user_context


def ensure_owner_or_admin(resource_user_id: str, current_user: Dict[str, Any], not_found: str) -> None:
    """404 instead of 403 so foreign resource ids are not disclosed."""
    if current_user.get("is_admin"):
        return
    if resource_user_id != current_user.get("id"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
