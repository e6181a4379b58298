"""SQLAlchemy ORM models."""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String

from devices_api.infrastructure.database.base import Base
from devices_api.infrastructure.database.types import UTCDateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Device(Base):
    __tablename__ = "device"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False, index=True)
    state = Column(String(20), nullable=False, index=True)
    creation_time = Column(UTCDateTime, nullable=False, default=utcnow)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
