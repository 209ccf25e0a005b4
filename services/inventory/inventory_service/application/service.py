from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core import ConflictError, get_logger
from inventory_service.domain.models import StockRecord
from .schemas import StockMovement

logger = get_logger(__name__)

# (store_id, sku, available)
SEED_ROWS = (
    ("S001", "SKU-001", 10),
    ("S001", "SKU-002", 5),
)


class InsufficientStock(ConflictError):
    reason = "no_stock"


class InsufficientReserved(ConflictError):
    reason = "no_reserved"


class InventoryService:
    """
    Stock buckets per (store_id, sku).

    Units move available -> reserved (reserve) -> consumed (confirm). Both
    moves are single conditional UPDATE statements, so the availability
    check and the write cannot interleave with another request.
    """

    def __init__(self, db: Session):
        self.db = db

    def seed(self) -> int:
        """Insert the demo rows that are not there yet. Returns how many were added."""
        existing = {
            (row.store_id, row.sku)
            for row in self.db.execute(select(StockRecord.store_id, StockRecord.sku))
        }
        added = 0
        for store_id, sku, available in SEED_ROWS:
            if (store_id, sku) in existing:
                continue
            self.db.add(StockRecord(store_id=store_id, sku=sku, available=available, reserved=0))
            added += 1
        try:
            self.db.commit()
        except IntegrityError:
            # a concurrent seed inserted the same pairs first
            self.db.rollback()
            logger.info("Seed rows already present")
            return 0
        logger.info(f"Seeded {added} stock row(s)")
        return added

    def list(self, store: Optional[str] = None, sku: Optional[str] = None):
        stmt = select(StockRecord)
        if store:
            stmt = stmt.where(StockRecord.store_id == store)
        if sku:
            stmt = stmt.where(StockRecord.sku == sku)
        return self.db.scalars(stmt).all()

    def get(self, store_id: str, sku: str) -> Optional[StockRecord]:
        return self.db.scalars(
            select(StockRecord).where(StockRecord.store_id == store_id, StockRecord.sku == sku)
        ).first()

    def reserve(self, data: StockMovement) -> None:
        result = self.db.execute(
            update(StockRecord)
            .where(
                StockRecord.store_id == data.store_id,
                StockRecord.sku == data.sku,
                StockRecord.available >= data.qty,
            )
            .values(
                available=StockRecord.available - data.qty,
                reserved=StockRecord.reserved + data.qty,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            raise InsufficientStock(f"cannot reserve {data.qty} of {data.store_id}/{data.sku}")
        self.db.commit()
        logger.info(f"Reserved {data.qty} of {data.store_id}/{data.sku}")

    def confirm(self, data: StockMovement) -> None:
        result = self.db.execute(
            update(StockRecord)
            .where(
                StockRecord.store_id == data.store_id,
                StockRecord.sku == data.sku,
                StockRecord.reserved >= data.qty,
            )
            .values(reserved=StockRecord.reserved - data.qty)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            raise InsufficientReserved(f"cannot confirm {data.qty} of {data.store_id}/{data.sku}")
        self.db.commit()
        logger.info(f"Confirmed {data.qty} of {data.store_id}/{data.sku}")
