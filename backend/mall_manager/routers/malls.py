from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas import MallCreate, MallDetail, MallOut, MallUpdate, StoreBase, StoreOut
from ..services import mall_service, store_service

router = APIRouter(prefix="/api", tags=["malls"])


@router.get("/malls", response_model=list[MallOut])
def list_malls(db: Session = Depends(get_db)):
    return mall_service.list_malls(db)


@router.post("/malls", response_model=MallOut, status_code=status.HTTP_201_CREATED)
def create_mall(payload: MallCreate, db: Session = Depends(get_db)):
    return mall_service.create_mall(db, payload.name, payload.city, payload.capacity)


@router.get("/malls/{mall_id}", response_model=MallDetail)
def get_mall(mall_id: UUID, db: Session = Depends(get_db)):
    mall = mall_service.get_mall(db, mall_id)
    stores = mall_service.list_stores(db, mall_id)

    return MallDetail(
        id=mall.id,
        name=mall.name,
        city=mall.city,
        revenue=mall.revenue,
        capacity=mall.capacity,
        created_at=mall.created_at,
        updated_at=mall.updated_at,
        stores=[StoreOut.model_validate(s) for s in stores],
    )


@router.patch("/malls/{mall_id}", response_model=MallOut)
def update_mall(mall_id: UUID, payload: MallUpdate, db: Session = Depends(get_db)):
    return mall_service.update_mall(db, mall_id, payload.model_dump(exclude_unset=True))


@router.delete("/malls/{mall_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_mall(mall_id: UUID, db: Session = Depends(get_db)):
    mall_service.destroy_mall(db, mall_id)


@router.get("/malls/{mall_id}/stores", response_model=list[StoreOut])
def list_mall_stores(mall_id: UUID, db: Session = Depends(get_db)):
    return mall_service.list_stores(db, mall_id)


@router.post(
    "/malls/{mall_id}/stores", response_model=StoreOut, status_code=status.HTTP_201_CREATED
)
def create_mall_store(mall_id: UUID, payload: StoreBase, db: Session = Depends(get_db)):
    return store_service.create_store(db, payload.name, payload.category, mall_id)
