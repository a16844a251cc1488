from sqlalchemy.orm import Session
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging

from inventory.models.product import Product
from inventory.schemas.product import ProductCreate, ProductUpdate, ProductResponse

logger = logging.getLogger(__name__)

# SQLite INTEGER PRIMARY KEY is a signed 64-bit value
MAX_PRODUCT_ID = 2**63 - 1


class ProductNotFoundError(Exception):
    """Exception raised when the requested product doesn't exist."""

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class ProductService:
    """
    Product store: the only component that reads or writes the
    `products` table.

    All methods return detached `ProductResponse` copies; ORM instances
    never leave this class. Storage errors roll back the session and
    propagate to the caller.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, product_data: ProductCreate) -> ProductResponse:
        """
        Create a new product.

        Args:
            product_data: Validated creation data

        Returns:
            The persisted product, including `id` and `created_at`
        """
        product = Product(
            name=product_data.name,
            price=product_data.price,
            stock=product_data.stock
        )
        try:
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating product: {e}")
            raise

        logger.info(f"Product #{product.id} created")
        return ProductResponse.model_validate(product)

    def list_all(self) -> List[ProductResponse]:
        """Get every product, most recently created first."""
        products = self.db.query(Product).order_by(Product.id.desc()).all()
        return [ProductResponse.model_validate(p) for p in products]

    def get_by_id(self, product_id: int) -> ProductResponse:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If no product has that ID
        """
        return ProductResponse.model_validate(self._get(product_id))

    def update(self, product_id: int, changes: ProductUpdate) -> ProductResponse:
        """
        Update an existing product.

        Fields present in `changes` replace the stored value, absent
        fields keep it. `id` and `created_at` are never touched.

        Args:
            product_id: ID of product to update
            changes: Validated partial data

        Returns:
            The full updated product

        Raises:
            ProductNotFoundError: If no product has that ID
        """
        product = self._get(product_id)
        present = changes.model_fields_set

        if "name" in present:
            product.name = changes.name
        if "price" in present:
            product.price = changes.price
        if "stock" in present:
            product.stock = changes.stock

        try:
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating product #{product_id}: {e}")
            raise

        logger.info(f"Product #{product_id} updated ({', '.join(sorted(present))})")
        return ProductResponse.model_validate(product)

    def delete(self, product_id: int) -> None:
        """
        Delete a product.

        Raises:
            ProductNotFoundError: If no row was deleted
        """
        if not self._storable_id(product_id):
            raise ProductNotFoundError(product_id)

        try:
            result = self.db.execute(delete(Product).where(Product.id == product_id))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting product #{product_id}: {e}")
            raise

        if result.rowcount == 0:
            raise ProductNotFoundError(product_id)

        logger.info(f"Product #{product_id} deleted")

    def _get(self, product_id: int) -> Product:
        if not self._storable_id(product_id):
            raise ProductNotFoundError(product_id)
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    @staticmethod
    def _storable_id(product_id: int) -> bool:
        # larger values overflow the driver and can never match a row
        return -MAX_PRODUCT_ID - 1 <= product_id <= MAX_PRODUCT_ID
