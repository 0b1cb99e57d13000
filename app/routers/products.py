# app/routers/products.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.common import ApiResponse
from app.schemas.product import ProductRead
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


# -------- Public endpoints --------


@router.get("", response_model=ApiResponse[list[ProductRead]])
def list_products(session: Session = Depends(get_session)):
    """
    List the whole catalog, newest first.
    """
    products = service.list_products(session)
    return ApiResponse(
        message="Products retrieved successfully",
        data=[ProductRead.model_validate(p) for p in products],
    )


@router.get(
    "/category/{category}",
    response_model=ApiResponse[list[ProductRead]],
)
def list_products_by_category(
    category: str,
    session: Session = Depends(get_session),
):
    """
    Products whose category equals `category` (case-insensitive).
    An unknown category gives an empty list.
    """
    products = service.list_by_category(session, category)
    return ApiResponse(
        message=f"Products in category '{category}' retrieved successfully",
        data=[ProductRead.model_validate(p) for p in products],
    )


@router.get(
    "/search/{query}",
    response_model=ApiResponse[list[ProductRead]],
)
def search_products(
    query: str,
    session: Session = Depends(get_session),
):
    """
    Case-insensitive substring search over name, description and category.
    """
    products = service.search(session, query)
    return ApiResponse(
        message=f"Search results for '{query}'",
        data=[ProductRead.model_validate(p) for p in products],
    )


@router.get("/{product_id}", response_model=ApiResponse[ProductRead])
def get_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Get a single product by numeric id.
    """
    product = service.get_product(session, product_id)
    return ApiResponse(
        message="Product retrieved successfully",
        data=ProductRead.model_validate(product),
    )
