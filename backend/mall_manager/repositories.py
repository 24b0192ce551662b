"""
Persistence boundary for malls and stores.

Repositories only flush; committing and rolling back belong to the caller's
database.transaction() scope so multi-step operations stay atomic.
"""
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from .errors import NotFoundError
from .models import Mall, Store


class _Repository:
    model: Any = None
    resource_type = ""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, entity):
        self.db.add(entity)
        self.db.flush()
        return entity

    def find_by_id(self, entity_id: UUID):
        entity = self.db.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(self.resource_type, entity_id)
        return entity

    def update(self, entity_id: UUID, fields: dict[str, Any]):
        entity = self.find_by_id(entity_id)
        for key, value in fields.items():
            setattr(entity, key, value)
        self.db.flush()
        return entity

    def delete(self, entity_id: UUID) -> None:
        entity = self.find_by_id(entity_id)
        self.db.delete(entity)
        self.db.flush()


class MallRepository(_Repository):
    model = Mall
    resource_type = "Mall"

    def list_all(self) -> list[Mall]:
        return self.db.query(Mall).order_by(Mall.name).all()

    def lock(self, mall_id: UUID) -> Mall:
        """
        Load the mall with a row lock (SELECT ... FOR UPDATE) so concurrent
        store creations against it are serialized. SQLite ignores the clause;
        there every transaction starts with BEGIN IMMEDIATE (see database.py).
        """
        mall = (
            self.db.query(Mall)
            .filter(Mall.id == mall_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if mall is None:
            raise NotFoundError(self.resource_type, mall_id)
        return mall

    def increment_revenue(self, mall_id: UUID, amount: int) -> Mall:
        """
        Atomic `revenue = revenue + amount`; no read-modify-write in Python.
        The row is reloaded afterwards so the returned mall carries the stored value.
        """
        updated = (
            self.db.query(Mall)
            .filter(Mall.id == mall_id)
            .update({Mall.revenue: Mall.revenue + amount}, synchronize_session=False)
        )
        if not updated:
            raise NotFoundError(self.resource_type, mall_id)
        return (
            self.db.query(Mall)
            .filter(Mall.id == mall_id)
            .populate_existing()
            .one()
        )


class StoreRepository(_Repository):
    model = Store
    resource_type = "Store"

    def list_all(self) -> list[Store]:
        return self.db.query(Store).order_by(Store.name).all()

    def count_by_mall(self, mall_id: UUID) -> int:
        return self.db.query(Store).filter(Store.mall_id == mall_id).count()

    def list_by_mall(self, mall_id: UUID) -> list[Store]:
        return (
            self.db.query(Store)
            .filter(Store.mall_id == mall_id)
            .order_by(Store.created_at)
            .all()
        )
