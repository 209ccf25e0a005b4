import math
from typing import Any, Optional, Union

from pydantic import BaseModel, field_validator

# Whole amounts go out as JSON integers (100, not 100.0)
Amount = Union[int, float]

class PriceRead(BaseModel):
    ok: bool = True
    sku: str
    price: Amount

class CouponValidation(BaseModel):
    # code is looked up as-is; anything that is not a known string is just invalid
    code: Any = None
    itemsTotal: float = 0

    @field_validator("itemsTotal", mode="before")
    @classmethod
    def coerce_total(cls, value: Any) -> float:
        """Absent, null, non-numeric or out-of-range totals count as 0."""
        try:
            total = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0
        return total if math.isfinite(total) else 0.0

class CouponResult(BaseModel):
    valid: bool
    discount: Optional[Amount] = None
    final: Optional[Amount] = None
    reason: Optional[str] = None
