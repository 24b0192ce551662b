"""
Store operations.

Creating a store under a mall is a two-step protocol: load and lock the mall
with its current store count, validate, then insert and hand a StoreCreated
event to the mall, all in one transaction. Updates never re-check capacity
and never raise StoreCreated.
"""
import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from ..database import transaction
from ..errors import CapacityExceededError, ValidationError
from ..events import StoreCreated
from ..models import Store
from ..repositories import MallRepository, StoreRepository
from ..validators import has_room, validate_store
from . import mall_service

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "category")


def create_store(
    db: Session,
    name: Optional[str],
    category: Optional[str],
    mall_id: Optional[UUID] = None,
) -> Store:
    errors = validate_store(name, category)

    with transaction(db):
        if mall_id is not None:
            mall = MallRepository(db).lock(mall_id)
            count = StoreRepository(db).count_by_mall(mall.id)
            if not has_room(count, mall.capacity):
                logger.warning(
                    f"Rejected store {name!r}: mall {mall.id} is at capacity "
                    f"({count}/{mall.capacity})"
                )
                raise CapacityExceededError(mall.id, mall.capacity, errors)

        if errors:
            logger.warning(f"Rejected store {name!r}: {errors}")
            raise ValidationError(errors)

        store = StoreRepository(db).insert(Store(name=name, category=category, mall_id=mall_id))
        if store.mall_id is not None:
            mall_service.handle_store_created(db, StoreCreated(store_id=store.id, mall_id=store.mall_id))

    logger.info(f"Created store {store.name} ({store.id}) in mall {store.mall_id}")
    return store


def get_store(db: Session, store_id: UUID) -> Store:
    return StoreRepository(db).find_by_id(store_id)


def list_stores(db: Session) -> list[Store]:
    return StoreRepository(db).list_all()


def update_store(db: Session, store_id: UUID, fields: dict[str, Any]) -> Store:
    unknown = [key for key in fields if key not in UPDATABLE_FIELDS]
    if unknown:
        raise ValidationError({key: ["cannot be updated directly"] for key in unknown})

    repo = StoreRepository(db)
    with transaction(db):
        store = repo.find_by_id(store_id)
        merged = {key: fields.get(key, getattr(store, key)) for key in UPDATABLE_FIELDS}
        errors = validate_store(merged["name"], merged["category"])
        if errors:
            logger.warning(f"Rejected update of store {store_id}: {errors}")
            raise ValidationError(errors)
        store = repo.update(store_id, fields)
    return store


def destroy_store(db: Session, store_id: UUID) -> None:
    with transaction(db):
        StoreRepository(db).delete(store_id)
    logger.info(f"Destroyed store {store_id}")
