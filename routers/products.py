from fastapi import APIRouter, Request
from starlette import status
from core.exceptions import PersistenceError
from schemas.product_schemas import ProductRecord
from services.catalog_service import CatalogService
from utils.deps import storage_dependency
from middleware.rate_limiter import limiter
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/api/products",
    tags=["products"]
)


@router.get("", response_model=list[ProductRecord], status_code=status.HTTP_200_OK)
@limiter.limit("120/minute")
def list_products(request: Request, storage: storage_dependency):
    try:
        return CatalogService.list_products(storage)
    except PersistenceError as exc:
        logger.error("Product listing failed")
        raise PersistenceError("Failed to retrieve products") from exc


# Registered before /{product_id} so "featured" is not parsed as an id
@router.get("/featured", response_model=list[ProductRecord], status_code=status.HTTP_200_OK)
@limiter.limit("120/minute")
def list_featured_products(request: Request, storage: storage_dependency):
    try:
        return CatalogService.list_featured(storage)
    except PersistenceError as exc:
        logger.error("Featured product listing failed")
        raise PersistenceError("Failed to retrieve featured products") from exc


@router.get("/category/{category}", response_model=list[ProductRecord], status_code=status.HTTP_200_OK)
@limiter.limit("120/minute")
def list_products_by_category(request: Request, category: str, storage: storage_dependency):
    """
    Products in one category. "All Apps" returns the whole catalog.
    """
    try:
        return CatalogService.list_by_category(storage, category)
    except PersistenceError as exc:
        logger.error("Category listing failed", extra={"category": category})
        raise PersistenceError("Failed to retrieve products by category") from exc


@router.get("/{product_id}", response_model=ProductRecord, status_code=status.HTTP_200_OK)
@limiter.limit("120/minute")
def get_product(request: Request, product_id: int, storage: storage_dependency):
    try:
        return CatalogService.get_product(storage, product_id)
    except PersistenceError as exc:
        logger.error("Product lookup failed", extra={"product_id": product_id})
        raise PersistenceError("Failed to retrieve product") from exc
