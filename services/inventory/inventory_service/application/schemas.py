from pydantic import BaseModel, ConfigDict, Field, StrictInt

class StockMovement(BaseModel):
    """Body of /reservations and /confirm. qty must be a positive integer."""
    store_id: str = Field(min_length=1, max_length=20)
    sku: str = Field(min_length=1, max_length=50)
    qty: StrictInt = Field(gt=0)

class StockRead(BaseModel):
    id: int
    store_id: str
    sku: str
    available: int
    reserved: int
    model_config = ConfigDict(from_attributes=True)

class OkResponse(BaseModel):
    ok: bool = True
