"""
Domain events raised by store operations and handled synchronously by the
owning mall, inside the same transaction as the change that raised them.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID


@dataclass(frozen=True)
class StoreCreated:
    store_id: UUID
    mall_id: UUID
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
