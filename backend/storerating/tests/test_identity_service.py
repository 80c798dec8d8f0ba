import pytest
from sqlalchemy.exc import IntegrityError

from storerating.core.errors import EmailTaken, NotFound, ValidationFailed
from storerating.core.roles import Population
from storerating.core.security import verify_password
from storerating.models import Rating, Store, User
from storerating.services import identity_service, rating_service

from conftest import DEFAULT_PASSWORD, make_store


NAME = "Jonathan Q. Publicsmith II"


def register(db, email, name=NAME):
    return identity_service.register_user(db, name, email, DEFAULT_PASSWORD, "1 A St")


def test_register_creates_normal_user_with_hashed_password(db):
    user = register(db, "jq@ex.com")
    assert user.id is not None
    assert user.role == "normal_user"
    assert user.claim_status == "none"
    assert user.hashed_password != DEFAULT_PASSWORD
    assert verify_password(DEFAULT_PASSWORD, user.hashed_password)


def test_register_rejects_invalid_fields_without_writing(db):
    with pytest.raises(ValidationFailed) as exc:
        identity_service.register_user(db, "too short", "jq@ex.com", DEFAULT_PASSWORD, "1 A St")
    assert exc.value.fields == ["name"]
    assert db.query(User).filter(User.email == "jq@ex.com").count() == 0


def test_register_rejects_email_used_by_user(db):
    register(db, "jq@ex.com")
    with pytest.raises(EmailTaken):
        register(db, "jq@ex.com", name="Someone Else Entirely Here")


def test_register_rejects_email_used_by_store(db):
    make_store(db, "shop@ex.com")
    with pytest.raises(EmailTaken):
        register(db, "shop@ex.com")
    assert db.query(User).filter(User.email == "shop@ex.com").count() == 0


def test_database_enforces_unique_email_within_population(db):
    register(db, "jq@ex.com")
    db.add(User(name=NAME, email="jq@ex.com", hashed_password="x", address="1 A St"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_find_by_email_searches_users_then_stores(db):
    user = register(db, "jq@ex.com")
    store = make_store(db, "shop@ex.com")

    population, record = identity_service.find_by_email(db, "jq@ex.com")
    assert population == Population.users
    assert record.id == user.id

    population, record = identity_service.find_by_email(db, "shop@ex.com")
    assert population == Population.stores
    assert record.id == store.id

    with pytest.raises(NotFound):
        identity_service.find_by_email(db, "nobody@ex.com")


def test_get_profile_picks_table_by_role(db):
    user = register(db, "jq@ex.com")
    store = make_store(db, "shop@ex.com")

    assert isinstance(identity_service.get_profile(db, user.id, "normal_user"), User)
    assert isinstance(identity_service.get_profile(db, store.id, "store_owner"), Store)
    with pytest.raises(NotFound):
        identity_service.get_profile(db, 9999, "admin")


def test_list_users_sorting_and_allowlist(db):
    register(db, "b@ex.com", name="Bbbbbbbbbbbbbbbbbbbbbb")
    register(db, "a@ex.com", name="Cccccccccccccccccccccc")
    register(db, "c@ex.com", name="Aaaaaaaaaaaaaaaaaaaaaa")

    by_name = [u.email for u in identity_service.list_users(db)]
    assert by_name == ["c@ex.com", "b@ex.com", "a@ex.com"]

    by_email_desc = [u.email for u in identity_service.list_users(db, "email", "desc")]
    assert by_email_desc == ["c@ex.com", "b@ex.com", "a@ex.com"]

    injected = [u.email for u in identity_service.list_users(db, "hashed_password", "DESC; DROP TABLE users")]
    assert injected == by_name


def test_delete_user_cascades_to_ratings(db):
    user = register(db, "jq@ex.com")
    store = make_store(db, "shop@ex.com")
    rating_service.upsert_rating(db, user.id, store.id, 4)

    identity_service.delete_user(db, user.id)

    assert db.query(User).filter(User.id == user.id).count() == 0
    assert db.query(Rating).count() == 0


def test_delete_store_cascades_and_is_unconditional(db):
    user = register(db, "jq@ex.com")
    store = make_store(db, "shop@ex.com")
    rating_service.upsert_rating(db, user.id, store.id, 2)

    identity_service.delete_store(db, store.id)
    identity_service.delete_store(db, store.id)

    assert db.query(Store).count() == 0
    assert db.query(Rating).count() == 0
    assert db.query(User).filter(User.id == user.id).count() == 1
