from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Integer, UniqueConstraint

class Base(DeclarativeBase):
    pass

class StockRecord(Base):
    __tablename__ = "store_stock"
    # One bucket of stock per store and SKU
    __table_args__ = (UniqueConstraint("store_id", "sku", name="uq_store_stock_store_sku"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    store_id: Mapped[str] = mapped_column(String(20), index=True)
    sku: Mapped[str] = mapped_column(String(50))
    available: Mapped[int] = mapped_column(Integer, default=0)
    reserved: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"StockRecord({self.store_id}/{self.sku} available={self.available} reserved={self.reserved})"
