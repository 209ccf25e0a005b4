"""Static price and coupon tables, built once at import and never mutated."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class Coupon:
    code: str
    value: float
    active: bool
    type: str = "percent"

    def discount_for(self, total: float) -> float:
        return total * self.value / 100


PRICES: Mapping[str, float] = MappingProxyType({
    "SKU-001": 100,
    "SKU-002": 50,
})

COUPONS: Mapping[str, Coupon] = MappingProxyType({
    coupon.code: coupon
    for coupon in (
        Coupon(code="SAVE10", value=10, active=True),
        Coupon(code="EXPIRED15", value=15, active=False),
    )
})


def find_price(sku: str) -> Optional[float]:
    return PRICES.get(sku)


def find_coupon(code: Optional[str]) -> Optional[Coupon]:
    if not code:
        return None
    return COUPONS.get(code)
