from decimal import Decimal
import re
import uuid

import pytest

from storefront.db import models, schemas, storage
from storefront.db.repositories import orders as orders_repo


@pytest.fixture
def shopper(make_user):
    return make_user()


@pytest.fixture
def order_payload(shopper, shipping_address):
    return schemas.OrderCreate(
        user_id=shopper.id,
        total_amount=Decimal("2697.00"),
        shipping_address=shipping_address,
        payment_method="upi",
    )


def _items(*products):
    return [
        schemas.OrderItemCreate(product_id=p.id, quantity=2, size="M", price=p.price)
        for p in products
    ]


def test_generate_order_number_format():
    number = orders_repo.generate_order_number()
    assert re.fullmatch(r"ORD-\d{13}-[0-9A-Z]{9}", number)
    assert orders_repo.generate_order_number() != number


def test_create_order_writes_order_items_and_initial_tracking(db_session, order_payload, make_product):
    shirt = make_product()
    order = storage.create_order(db_session, order_payload, _items(shirt))

    assert order.order_number.startswith("ORD-")
    assert order.status == "pending"
    assert order.payment_status == "pending"
    assert order.shipping_address["city"] == "Bengaluru"

    loaded = storage.get_order(db_session, order.id)
    assert len(loaded.order_items) == 1
    assert loaded.order_items[0].product.name == "Linen Shirt"
    assert loaded.order_items[0].quantity == 2
    assert [(t.status, t.message) for t in loaded.tracking] == [("pending", "Order placed successfully")]


def test_create_order_rolls_back_everything_on_failure(db_session, order_payload, make_product, monkeypatch):
    shirt = make_product()
    original_tracking = models.OrderTracking

    def _exploding_tracking(**kwargs):
        raise RuntimeError("tracking insert failed")

    monkeypatch.setattr(orders_repo.models, "OrderTracking", _exploding_tracking)
    with pytest.raises(RuntimeError):
        storage.create_order(db_session, order_payload, _items(shirt))
    monkeypatch.setattr(orders_repo.models, "OrderTracking", original_tracking)

    assert db_session.query(models.Order).count() == 0
    assert db_session.query(models.OrderItem).count() == 0
    assert db_session.query(models.OrderTracking).count() == 0


def test_get_orders_newest_first_with_items(db_session, order_payload, make_product):
    shirt = make_product()
    first = storage.create_order(db_session, order_payload, _items(shirt))
    second = storage.create_order(db_session, order_payload, _items(shirt))
    first.created_at = second.created_at.replace(year=second.created_at.year - 1)
    db_session.commit()

    orders = storage.get_orders(db_session, order_payload.user_id)
    assert [o.id for o in orders] == [second.id, first.id]
    assert all(len(o.order_items) == 1 for o in orders)
    assert storage.get_orders(db_session, "someone-else") == []


def test_get_order_by_number_matches_get_order(db_session, order_payload, make_product):
    order = storage.create_order(db_session, order_payload, _items(make_product()))
    by_number = storage.get_order_by_number(db_session, order.order_number)
    assert by_number.id == order.id
    assert len(by_number.tracking) == 1
    assert storage.get_order_by_number(db_session, "ORD-0-MISSING00") is None
    assert storage.get_order(db_session, uuid.uuid4()) is None


def test_update_order_status_appends_tracking(db_session, order_payload, make_product):
    order = storage.create_order(db_session, order_payload, _items(make_product()))

    updated = storage.update_order_status(db_session, order.id, "shipped")
    assert updated.status == "shipped"

    events = storage.get_order_tracking(db_session, order.id)
    assert len(events) == 2
    messages = {e.message for e in events}
    assert "Order status updated to shipped" in messages


def test_update_order_status_missing_order(db_session):
    assert storage.update_order_status(db_session, uuid.uuid4(), "shipped") is None
    assert db_session.query(models.OrderTracking).count() == 0


def test_order_tracking_newest_first(db_session, order_payload, make_product):
    order = storage.create_order(db_session, order_payload, _items(make_product()))
    placed = storage.get_order_tracking(db_session, order.id)[0]

    later = storage.add_order_tracking(
        db_session,
        schemas.OrderTrackingCreate(order_id=order.id, status="shipped", message="Left the warehouse", location="Pune"),
    )
    later.timestamp = placed.timestamp.replace(year=placed.timestamp.year + 1)
    db_session.commit()

    events = storage.get_order_tracking(db_session, order.id)
    assert [e.id for e in events] == [later.id, placed.id]
    assert events[0].location == "Pune"


def test_get_all_orders_paginates(db_session, order_payload, make_product, make_user, shipping_address):
    other = make_user("shopper-2", "shopper2@example.com")
    shirt = make_product()
    storage.create_order(db_session, order_payload, _items(shirt))
    storage.create_order(
        db_session,
        order_payload.model_copy(update={"user_id": other.id}),
        _items(shirt),
    )
    assert len(storage.get_all_orders(db_session)) == 2
    assert len(storage.get_all_orders(db_session, skip=1, limit=10)) == 1
    assert len(storage.get_all_orders(db_session, skip=0, limit=1)) == 1


def test_payment_status_is_constrained(db_session, shopper, shipping_address):
    from sqlalchemy.exc import IntegrityError

    db_session.add(
        models.Order(
            user_id=shopper.id,
            order_number="ORD-1-CHECKPAY0",
            total_amount=Decimal("10.00"),
            shipping_address=shipping_address,
            payment_method="card",
            payment_status="maybe",
        )
    )
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()
    assert db_session.query(models.Order).count() == 0
