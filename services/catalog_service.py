from core.exceptions import NotFoundError
from schemas.product_schemas import ProductRecord
from storage.base import Storage
from utils.logger import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Read-side of the product catalog."""

    @staticmethod
    def list_products(storage: Storage) -> list[ProductRecord]:
        return storage.get_products()

    @staticmethod
    def get_product(storage: Storage, product_id: int) -> ProductRecord:
        product = storage.get_product_by_id(product_id)
        if product is None:
            logger.info("Product not found", extra={"product_id": product_id})
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def list_by_category(storage: Storage, category: str) -> list[ProductRecord]:
        return storage.get_products_by_category(category)

    @staticmethod
    def list_featured(storage: Storage) -> list[ProductRecord]:
        return storage.get_featured_products()
