"""
Mall operations.
A mall owns its stores: destroying it removes them in the same transaction,
and every StoreCreated event raised for it adds REVENUE_PER_STORE to revenue.
"""
import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from ..database import transaction
from ..errors import ValidationError
from ..events import StoreCreated
from ..models import DEFAULT_CAPACITY, Mall, Store
from ..repositories import MallRepository, StoreRepository
from ..validators import validate_mall, validate_presence

logger = logging.getLogger(__name__)

REVENUE_PER_STORE = 1000
UPDATABLE_FIELDS = ("name", "city", "capacity")


def create_mall(db: Session, name: Optional[str], city: Optional[str], capacity: Optional[int] = None) -> Mall:
    errors = validate_mall(name, city, capacity)
    if errors:
        logger.warning(f"Rejected mall {name!r}: {errors}")
        raise ValidationError(errors)

    with transaction(db):
        mall = MallRepository(db).insert(Mall(
            name=name,
            city=city,
            revenue=0,
            capacity=DEFAULT_CAPACITY if capacity is None else capacity,
        ))
    logger.info(f"Created mall {mall.name} ({mall.id}) with capacity {mall.capacity}")
    return mall


def get_mall(db: Session, mall_id: UUID) -> Mall:
    return MallRepository(db).find_by_id(mall_id)


def list_malls(db: Session) -> list[Mall]:
    return MallRepository(db).list_all()


def update_mall(db: Session, mall_id: UUID, fields: dict[str, Any]) -> Mall:
    """Apply attribute changes; the merged record must still be valid. Revenue is not writable."""
    unknown = [key for key in fields if key not in UPDATABLE_FIELDS]
    if unknown:
        raise ValidationError({key: ["cannot be updated directly"] for key in unknown})

    repo = MallRepository(db)
    with transaction(db):
        mall = repo.find_by_id(mall_id)
        merged = {key: fields.get(key, getattr(mall, key)) for key in UPDATABLE_FIELDS}
        errors = validate_mall(merged["name"], merged["city"], merged["capacity"])
        validate_presence(errors, "capacity", merged["capacity"])
        if errors:
            logger.warning(f"Rejected update of mall {mall_id}: {errors}")
            raise ValidationError(errors)
        mall = repo.update(mall_id, fields)
    return mall


def destroy_mall(db: Session, mall_id: UUID) -> None:
    """Delete every store the mall owns, then the mall; all or nothing."""
    malls = MallRepository(db)
    stores = StoreRepository(db)
    with transaction(db):
        mall = malls.find_by_id(mall_id)
        owned = stores.list_by_mall(mall.id)
        for store in owned:
            stores.delete(store.id)
        malls.delete(mall.id)
    logger.info(f"Destroyed mall {mall_id} and {len(owned)} store(s)")


def list_stores(db: Session, mall_id: UUID) -> list[Store]:
    mall = MallRepository(db).find_by_id(mall_id)
    return StoreRepository(db).list_by_mall(mall.id)


def increase_revenue(db: Session, mall_id: UUID) -> Mall:
    """Add REVENUE_PER_STORE to the mall's revenue and commit. Not idempotent."""
    with transaction(db):
        mall = _add_store_revenue(db, mall_id)
    return mall


def handle_store_created(db: Session, event: StoreCreated) -> Mall:
    """
    StoreCreated handler. Runs inside the caller's transaction, which is
    committed or rolled back together with the store insert.
    """
    return _add_store_revenue(db, event.mall_id)


def _add_store_revenue(db: Session, mall_id: UUID) -> Mall:
    mall = MallRepository(db).increment_revenue(mall_id, REVENUE_PER_STORE)
    logger.info(f"Mall {mall_id} revenue is now {mall.revenue}")
    return mall
