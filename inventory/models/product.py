from sqlalchemy import Column, Integer, String, Float, DateTime, CheckConstraint
from sqlalchemy.sql import func

from inventory.database import Base


class Product(Base):
    """
    Product model, the only table of the inventory.

    Attributes:
        id: Unique identifier, never reused after a delete
        name: Product name
        price: Unit price (must be non-negative)
        stock: Available quantity (must be non-negative)
        created_at: Timestamp when product was created
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.current_timestamp())

    # Database-level constraints to ensure data integrity
    __table_args__ = (
        CheckConstraint("price >= 0", name="check_price_non_negative"),
        CheckConstraint("stock >= 0", name="check_stock_non_negative"),
        # AUTOINCREMENT keeps SQLite from handing out a deleted id again
        {"sqlite_autoincrement": True},
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock})>"
