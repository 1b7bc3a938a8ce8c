import uuid
from sqlalchemy import Column, String, DateTime, Boolean
from .base import Base, now_utc


class User(Base):
    __tablename__ = 'users'
    # Subject id issued by the upstream auth proxy; random uuid for locally created users
    id = Column(String(255), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, nullable=True, unique=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
