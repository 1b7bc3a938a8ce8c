from datetime import timedelta
from decimal import Decimal

import pytest

from storefront.db import schemas, storage
from storefront.db.repositories.reviews import round_rating


@pytest.fixture
def shopper(make_user):
    return make_user()


def test_wishlist_add_is_idempotent(db_session, shopper, make_product):
    dress = make_product("Floral Dress", "women", "2499.00")
    first = storage.add_to_wishlist(db_session, schemas.WishlistItemCreate(user_id=shopper.id, product_id=dress.id))
    again = storage.add_to_wishlist(db_session, schemas.WishlistItemCreate(user_id=shopper.id, product_id=dress.id))
    assert again.id == first.id
    assert len(storage.get_wishlist(db_session, shopper.id)) == 1


def test_wishlist_newest_first_with_product(db_session, shopper, make_product):
    dress = make_product("Floral Dress", "women", "2499.00")
    belt = make_product("Leather Belt", "accessories", "899.00")
    older = storage.add_to_wishlist(db_session, schemas.WishlistItemCreate(user_id=shopper.id, product_id=dress.id))
    newer = storage.add_to_wishlist(db_session, schemas.WishlistItemCreate(user_id=shopper.id, product_id=belt.id))
    older.created_at = newer.created_at - timedelta(days=1)
    db_session.commit()

    items = storage.get_wishlist(db_session, shopper.id)
    assert [i.product.name for i in items] == ["Leather Belt", "Floral Dress"]


def test_remove_from_wishlist(db_session, shopper, make_product):
    dress = make_product("Floral Dress", "women", "2499.00")
    storage.add_to_wishlist(db_session, schemas.WishlistItemCreate(user_id=shopper.id, product_id=dress.id))
    assert storage.remove_from_wishlist(db_session, shopper.id, dress.id) is True
    assert storage.remove_from_wishlist(db_session, shopper.id, dress.id) is False


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, Decimal("0.0")),
        (4.5, Decimal("4.5")),
        (4.25, Decimal("4.3")),
        (13 / 3, Decimal("4.3")),
        (14 / 3, Decimal("4.7")),
    ],
)
def test_round_rating(value, expected):
    assert round_rating(value) == expected


def test_add_review_recomputes_rating_and_count(db_session, make_user, make_product):
    product = make_product()
    ratings = [("u1", 5), ("u2", 4), ("u3", 4)]
    for user_id, rating in ratings:
        make_user(user_id, f"{user_id}@example.com")
        storage.add_review(
            db_session,
            schemas.ReviewCreate(user_id=user_id, product_id=product.id, rating=rating, comment="ok"),
        )

    db_session.expire_all()
    refreshed = storage.get_product(db_session, product.id)
    assert refreshed.review_count == 3
    assert refreshed.rating == Decimal("4.3")


def test_get_product_reviews_newest_first_with_user(db_session, make_user, make_product):
    product = make_product()
    make_user("u1", "u1@example.com", first_name="Asha")
    make_user("u2", "u2@example.com", first_name="Ravi")
    older = storage.add_review(db_session, schemas.ReviewCreate(user_id="u1", product_id=product.id, rating=3))
    newer = storage.add_review(db_session, schemas.ReviewCreate(user_id="u2", product_id=product.id, rating=5))
    older.created_at = newer.created_at - timedelta(days=2)
    db_session.commit()

    reviews = storage.get_product_reviews(db_session, product.id)
    assert [r.user.first_name for r in reviews] == ["Ravi", "Asha"]


def test_add_review_rolls_back_insert_when_recompute_fails(db_session, make_user, make_product, monkeypatch):
    from storefront.db.repositories import reviews as reviews_repo

    product = make_product()
    make_user("u1", "u1@example.com")
    storage.add_review(db_session, schemas.ReviewCreate(user_id="u1", product_id=product.id, rating=5))
    make_user("u2", "u2@example.com")

    def _failing_rating(value):
        raise RuntimeError("aggregate failed")

    monkeypatch.setattr(reviews_repo, "round_rating", _failing_rating)
    with pytest.raises(RuntimeError):
        storage.add_review(db_session, schemas.ReviewCreate(user_id="u2", product_id=product.id, rating=1))

    db_session.expire_all()
    assert [r.user_id for r in storage.get_product_reviews(db_session, product.id)] == ["u1"]
    refreshed = storage.get_product(db_session, product.id)
    assert refreshed.review_count == 1
    assert refreshed.rating == Decimal("5.0")
