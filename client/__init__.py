from client.cart import Cart, CartStore, cart_item_from_product
from client.storefront_client import BillingDetails, StorefrontClient

__all__ = ["Cart", "CartStore", "cart_item_from_product", "BillingDetails", "StorefrontClient"]
