from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from inventory_service.infrastructure.db import get_db
from inventory_service.application.service import InventoryService
from inventory_service.application.schemas import StockMovement, StockRead, OkResponse

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

@router.post("/seed", response_model=OkResponse)
def seed_stock(db: Session = Depends(get_db)):
    InventoryService(db).seed()
    return OkResponse()

@router.get("/stock", response_model=list[StockRead])
def list_stock(store: Optional[str] = None, sku: Optional[str] = None, db: Session = Depends(get_db)):
    return InventoryService(db).list(store=store, sku=sku)

@router.post("/reservations", response_model=OkResponse, status_code=201)
def reserve_stock(payload: StockMovement, db: Session = Depends(get_db)):
    """Move qty units from available to reserved, 409 no_stock if short."""
    InventoryService(db).reserve(payload)
    return OkResponse()

@router.post("/confirm", response_model=OkResponse)
def confirm_stock(payload: StockMovement, db: Session = Depends(get_db)):
    """Consume qty reserved units, 409 no_reserved if short."""
    InventoryService(db).confirm(payload)
    return OkResponse()
