from decimal import Decimal

from schemas.product_schemas import ProductCreate
from utils.logger import get_logger

logger = get_logger(__name__)

_UNSPLASH = "https://images.unsplash.com/{}?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80"

SAMPLE_PRODUCTS = [
    ProductCreate(
        name="AI Assistant Pro",
        description="A powerful AI assistant that helps you automate tasks, generate content, and improve productivity.",
        price=Decimal("49.99"),
        image=_UNSPLASH.format("photo-1551288049-bebda4e38f71"),
        category="Productivity",
        featured=1,
        rating=Decimal("4.5"),
        review_count=128,
        badge="TRENDING"
    ),
    ProductCreate(
        name="DataViz Analytics",
        description="Comprehensive data visualization tool with AI-powered insights and interactive dashboards.",
        price=Decimal("79.99"),
        image=_UNSPLASH.format("photo-1517292987719-0369a794ec0f"),
        category="Business",
        featured=1,
        rating=Decimal("4.0"),
        review_count=94
    ),
    ProductCreate(
        name="Social Media Manager",
        description="All-in-one platform to schedule posts, analyze engagement, and grow your social media presence.",
        price=Decimal("39.99"),
        image=_UNSPLASH.format("photo-1555421689-3f034debb7a6"),
        category="Social Media",
        featured=1,
        rating=Decimal("5.0"),
        review_count=76,
        badge="NEW"
    ),
    ProductCreate(
        name="Code Assistant",
        description="AI-powered coding assistant that helps you write better code faster with smart suggestions.",
        price=Decimal("59.99"),
        image=_UNSPLASH.format("photo-1531482615713-2afd69097998"),
        category="Development",
        featured=1,
        rating=Decimal("4.7"),
        review_count=152
    ),
    ProductCreate(
        name="Content Creator Studio",
        description="Create professional-quality content with AI-powered tools for writing, design, and multimedia.",
        price=Decimal("69.99"),
        image=_UNSPLASH.format("photo-1486312338219-ce68d2c6f44d"),
        category="Productivity",
        featured=1,
        rating=Decimal("3.5"),
        review_count=63
    ),
    ProductCreate(
        name="Project Manager Pro",
        description="Comprehensive project management solution with AI-powered task allocation and analytics.",
        price=Decimal("89.99"),
        image=_UNSPLASH.format("photo-1527689368864-3a821dbccc34"),
        category="Business",
        featured=1,
        rating=Decimal("4.9"),
        review_count=217,
        badge="BESTSELLER"
    ),
]


def seed_catalog(storage, products: list[ProductCreate] = SAMPLE_PRODUCTS) -> int:
    """
    Insert the sample catalog if, and only if, the store has no products.

    The empty check and the inserts are not atomic; seeding runs once at
    startup in a single process.
    """
    if storage.get_products():
        logger.debug("Catalog already populated, skipping seed")
        return 0

    for product in products:
        storage.create_product(product)

    logger.info("Catalog seeded", extra={"products": len(products)})
    return len(products)
