"""
User repository functions.

Lookup and upsert of users keyed by the subject id issued by the auth proxy.
"""
from __future__ import annotations

from typing import Optional
from sqlalchemy.orm import Session

from storefront.db import models, schemas


def get_user(db: Session, user_id: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def upsert_user(db: Session, user: schemas.UserUpsert) -> models.User:
    """Insert the user, or on id conflict overwrite the supplied fields."""
    data = user.model_dump(exclude_unset=True)
    db_user = get_user(db, user.id)
    try:
        if db_user is None:
            db_user = models.User(**data)
            db.add(db_user)
        else:
            for key, value in data.items():
                setattr(db_user, key, value)
            db_user.updated_at = models.now_utc()
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user


def set_admin(db: Session, user_id: str, is_admin: bool = True) -> Optional[models.User]:
    db_user = get_user(db, user_id)
    if db_user and bool(db_user.is_admin) != is_admin:
        db_user.is_admin = is_admin
        db.commit()
        db.refresh(db_user)
    return db_user
