from typing import Union

from shared.core import NotFoundError, get_logger
from pricing_service.domain import catalog
from .schemas import CouponValidation, CouponResult, PriceRead

logger = get_logger(__name__)


class PriceNotFound(NotFoundError):
    reason = "no_price"


def whole(amount: float) -> Union[int, float]:
    """20.0 -> 20, 12.5 stays 12.5"""
    return int(amount) if float(amount).is_integer() else amount


class PricingService:
    """Read-only lookups over the static catalog."""

    def get_price(self, sku: str) -> PriceRead:
        price = catalog.find_price(sku)
        if price is None:
            raise PriceNotFound(f"no price for {sku!r}")
        return PriceRead(sku=sku, price=whole(price))

    def validate_coupon(self, data: CouponValidation) -> CouponResult:
        coupon = catalog.find_coupon(data.code) if isinstance(data.code, str) else None
        if coupon is None or not coupon.active:
            logger.debug(f"Coupon {data.code!r} rejected")
            return CouponResult(valid=False, reason="invalid")

        discount = coupon.discount_for(data.itemsTotal)
        return CouponResult(
            valid=True,
            discount=whole(discount),
            final=whole(max(0.0, data.itemsTotal - discount)),
        )
