from typing import Optional

from fastapi import APIRouter
from pricing_service.application.service import PricingService
from pricing_service.application.schemas import CouponValidation, CouponResult, PriceRead

router = APIRouter(prefix="/api/pricing", tags=["pricing"])

@router.get("/price", response_model=PriceRead)
def get_price(sku: str = ""):
    return PricingService().get_price(sku)

@router.post("/coupons/validate", response_model=CouponResult, response_model_exclude_none=True)
def validate_coupon(payload: Optional[CouponValidation] = None):
    """An unknown or inactive code is a 200 with valid=false, not an error."""
    return PricingService().validate_coupon(payload or CouponValidation())
