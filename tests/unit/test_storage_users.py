from storefront.db import schemas, storage


def test_upsert_inserts_then_updates_supplied_fields(db_session):
    created = storage.upsert_user(
        db_session,
        schemas.UserUpsert(id="sub-1", email="a@example.com", first_name="Asha"),
    )
    assert created.id == "sub-1"
    assert created.is_admin is False
    first_updated_at = created.updated_at

    updated = storage.upsert_user(
        db_session,
        schemas.UserUpsert(id="sub-1", last_name="Rao", profile_image_url="https://img/1.png"),
    )
    assert updated.id == "sub-1"
    # Fields not supplied on conflict are left alone
    assert updated.first_name == "Asha"
    assert updated.email == "a@example.com"
    assert updated.last_name == "Rao"
    assert updated.profile_image_url == "https://img/1.png"
    assert updated.updated_at >= first_updated_at


def test_get_user_missing_returns_none(db_session):
    assert storage.get_user(db_session, "nobody") is None


def test_get_user_by_email_and_set_admin(db_session, make_user):
    make_user("sub-2", "b@example.com")
    user = storage.get_user_by_email(db_session, "b@example.com")
    assert user.id == "sub-2"

    promoted = storage.set_admin(db_session, "sub-2", True)
    assert promoted.is_admin is True
    assert storage.set_admin(db_session, "missing", True) is None
