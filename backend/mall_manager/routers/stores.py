from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas import StoreCreate, StoreOut, StoreUpdate
from ..services import store_service

router = APIRouter(prefix="/api", tags=["stores"])


@router.get("/stores", response_model=list[StoreOut])
def list_stores(db: Session = Depends(get_db)):
    return store_service.list_stores(db)


@router.post("/stores", response_model=StoreOut, status_code=status.HTTP_201_CREATED)
def create_store(payload: StoreCreate, db: Session = Depends(get_db)):
    return store_service.create_store(db, payload.name, payload.category, payload.mall_id)


@router.get("/stores/{store_id}", response_model=StoreOut)
def get_store(store_id: UUID, db: Session = Depends(get_db)):
    return store_service.get_store(db, store_id)


@router.patch("/stores/{store_id}", response_model=StoreOut)
def update_store(store_id: UUID, payload: StoreUpdate, db: Session = Depends(get_db)):
    return store_service.update_store(db, store_id, payload.model_dump(exclude_unset=True))


@router.delete("/stores/{store_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_store(store_id: UUID, db: Session = Depends(get_db)):
    store_service.destroy_store(db, store_id)
