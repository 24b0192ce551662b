import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
from .database import Base

DEFAULT_CAPACITY = 10


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Mall(Base):
    __tablename__ = "malls"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    city = Column(String, nullable=False)
    revenue = Column(Integer, nullable=False, default=0, server_default="0")
    capacity = Column(
        Integer, nullable=False, default=DEFAULT_CAPACITY, server_default=str(DEFAULT_CAPACITY)
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    # Stores are removed explicitly by mall_service.destroy_mall; the FK
    # cascade only backs that up at the database level.
    stores = relationship("Store", back_populates="mall", passive_deletes=True)

    def __repr__(self):
        return f"<Mall {self.name}>"


class Store(Base):
    __tablename__ = "stores"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    mall_id = Column(
        Uuid(as_uuid=True), ForeignKey("malls.id", ondelete="CASCADE"), nullable=True, index=True
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    mall = relationship("Mall", back_populates="stores")

    def __repr__(self):
        return f"<Store {self.name}>"
