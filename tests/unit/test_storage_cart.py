import uuid

import pytest

from storefront.db import schemas, storage


@pytest.fixture
def shopper(make_user):
    return make_user()


@pytest.fixture
def shirt(make_product):
    return make_product("Linen Shirt", "men", "1299.00", sizes=["M", "L"])


def _add(db, user_id, product_id, quantity=1, size=None, color=None):
    return storage.add_to_cart(
        db,
        schemas.CartItemCreate(user_id=user_id, product_id=product_id, quantity=quantity, size=size, color=color),
    )


def test_add_to_cart_merges_same_line(db_session, shopper, shirt):
    first = _add(db_session, shopper.id, shirt.id, quantity=1, size="M")
    second = _add(db_session, shopper.id, shirt.id, quantity=2, size="M")

    assert second.id == first.id
    assert second.quantity == 3
    assert len(storage.get_cart_items(db_session, shopper.id)) == 1


def test_add_to_cart_keeps_distinct_variants_apart(db_session, shopper, shirt):
    _add(db_session, shopper.id, shirt.id, size="M")
    _add(db_session, shopper.id, shirt.id, size="L")
    _add(db_session, shopper.id, shirt.id, size="M", color="white")
    assert len(storage.get_cart_items(db_session, shopper.id)) == 3


def test_unsized_lines_merge_null_safely(db_session, shopper, shirt):
    first = _add(db_session, shopper.id, shirt.id)
    merged = _add(db_session, shopper.id, shirt.id)
    sized = _add(db_session, shopper.id, shirt.id, size="M")

    assert merged.id == first.id
    assert merged.quantity == 2
    assert sized.id != first.id


def test_get_cart_items_includes_product(db_session, shopper, shirt):
    _add(db_session, shopper.id, shirt.id, quantity=2)
    items = storage.get_cart_items(db_session, shopper.id)
    assert items[0].product.name == "Linen Shirt"
    assert storage.get_cart_items(db_session, "someone-else") == []


def test_update_and_remove_cart_item(db_session, shopper, shirt):
    item = _add(db_session, shopper.id, shirt.id)
    item_id = item.id

    updated = storage.update_cart_item(db_session, item_id, 5)
    assert updated.quantity == 5
    assert storage.update_cart_item(db_session, uuid.uuid4(), 2) is None

    assert storage.remove_from_cart(db_session, item_id) is True
    assert storage.remove_from_cart(db_session, item_id) is False
    assert storage.get_cart_item(db_session, item_id) is None


def test_clear_cart_always_succeeds(db_session, shopper, shirt):
    _add(db_session, shopper.id, shirt.id)
    assert storage.clear_cart(db_session, shopper.id) is True
    assert storage.get_cart_items(db_session, shopper.id) == []
    # Clearing an empty cart is not an error
    assert storage.clear_cart(db_session, shopper.id) is True
