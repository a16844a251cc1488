from fastapi import APIRouter, Body, Depends, HTTPException, Path, Response, status
from sqlalchemy.orm import Session
from typing import Any, List
import logging

from inventory.database import get_db
from inventory.services.product_service import MAX_PRODUCT_ID, ProductService, ProductNotFoundError
from inventory.schemas.product import (
    ProductResponse,
    ProductValidationError,
    validate_for_create,
    validate_for_update,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Producto no encontrado"

router = APIRouter(prefix="/products", tags=["Products"])


def _bad_request(error: ProductValidationError) -> HTTPException:
    logger.info(f"Rejected product payload: {error}")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def _not_found(error: ProductNotFoundError) -> HTTPException:
    logger.warning(str(error))
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product with name, price, and initial stock."
)
def create_product(
    payload: Any = Body(None),
    db: Session = Depends(get_db)
):
    """
    Create a new product.

    - **name**: Product name (required, non-empty)
    - **price**: Product price, must be non-negative (required)
    - **stock**: Initial stock quantity, non-negative integer (required)
    """
    try:
        product_data = validate_for_create(payload)
    except ProductValidationError as e:
        raise _bad_request(e)

    service = ProductService(db)
    return service.create(product_data)


@router.get(
    "",
    response_model=List[ProductResponse],
    summary="List all products",
    description="Get every product, most recently created first."
)
def list_products(db: Session = Depends(get_db)):
    service = ProductService(db)
    return service.list_all()


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID"
)
def get_product(
    product_id: int = Path(..., le=MAX_PRODUCT_ID),
    db: Session = Depends(get_db)
):
    service = ProductService(db)
    try:
        return service.get_by_id(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update a product",
    description="Update product details. Only provided fields will be updated."
)
def update_product(
    product_id: int = Path(..., le=MAX_PRODUCT_ID),
    payload: Any = Body(None),
    db: Session = Depends(get_db)
):
    """
    Update a product.

    The product must exist before the payload is even looked at, so an
    unknown ID answers 404 whatever the body contains.
    """
    service = ProductService(db)
    try:
        service.get_by_id(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e)

    try:
        changes = validate_for_update(payload)
    except ProductValidationError as e:
        raise _bad_request(e)

    try:
        return service.update(product_id, changes)
    except ProductNotFoundError as e:
        # deleted between the check and the update
        raise _not_found(e)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
    response_class=Response
)
def delete_product(
    product_id: int = Path(..., le=MAX_PRODUCT_ID),
    db: Session = Depends(get_db)
):
    """Delete a product."""
    service = ProductService(db)
    try:
        service.delete(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
