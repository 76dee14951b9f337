from storage import SAMPLE_PRODUCTS, MemoryStorage, seed_catalog


def test_memory_store_seeds_on_construction():
    assert len(MemoryStorage().get_products()) == len(SAMPLE_PRODUCTS)


def test_bootstrap_seeds_empty_store(empty_storage):
    assert empty_storage.bootstrap() == len(SAMPLE_PRODUCTS)
    assert len(empty_storage.get_products()) == len(SAMPLE_PRODUCTS)


def test_bootstrap_twice_does_not_duplicate(empty_storage):
    empty_storage.bootstrap()
    assert empty_storage.bootstrap() == 0

    products = empty_storage.get_products()
    assert len(products) == len(SAMPLE_PRODUCTS)
    assert len({product.name for product in products}) == len(SAMPLE_PRODUCTS)


def test_seed_skips_populated_store(storage):
    before = storage.get_products()

    assert seed_catalog(storage) == 0
    assert storage.get_products() == before
