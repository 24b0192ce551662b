from uuid import UUID
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

# Required fields stay Optional here: presence and length are checked by
# validators.py so that every fault is reported per field in one response.


# --- Store ---

class StoreBase(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None


class StoreCreate(StoreBase):
    mall_id: Optional[UUID] = None


class StoreUpdate(StoreBase):
    model_config = {"extra": "forbid"}


class StoreOut(BaseModel):
    id: UUID
    name: str
    category: str
    mall_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# --- Mall ---

class MallBase(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None
    capacity: Optional[int] = None


class MallCreate(MallBase):
    pass


class MallUpdate(MallBase):
    model_config = {"extra": "forbid"}


class MallOut(BaseModel):
    id: UUID
    name: str
    city: str
    revenue: int
    capacity: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MallDetail(MallOut):
    stores: list[StoreOut] = []
