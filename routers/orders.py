from fastapi import APIRouter, Request
from starlette import status
from core.exceptions import PersistenceError
from schemas.order_schemas import CheckoutRequest, OrderDetail, OrderPlacedResponse
from services.order_service import OrderService
from utils.deps import storage_dependency
from middleware.rate_limiter import limiter
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/api/orders",
    tags=["orders"]
)


@router.post("", response_model=OrderPlacedResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
def place_order(request: Request, body: CheckoutRequest, storage: storage_dependency):
    """
    Place an order from a checkout payload.

    Payment card fields are checked for shape only and never charged.
    """
    try:
        return OrderService.place_order(body, storage)
    except PersistenceError as exc:
        logger.error("Order placement failed", extra={"items": len(body.items)})
        raise PersistenceError("Failed to create order") from exc


@router.get("/{order_id}", response_model=OrderDetail, status_code=status.HTTP_200_OK)
@limiter.limit("60/minute")
def get_order(request: Request, order_id: int, storage: storage_dependency):
    return OrderService.get_order(storage, order_id)
