"""Application tests for SyncUser / RemoveUser and lazy reconciliation."""

from protean.utils.globals import current_domain
from storefront.identity.session import Identity
from storefront.identity.user.reconciliation import ensure_user, find_user
from storefront.identity.user.sync import RemoveUser, SyncUser
from storefront.identity.user.user import User


def _sync(**overrides):
    defaults = {"external_id": "user_2abc", "email": "asha@example.com", "name": "Asha Rao"}
    defaults.update(overrides)
    return current_domain.process(SyncUser(**defaults), asynchronous=False)


def _user_count():
    return current_domain.repository_for(User)._dao.query.all().total


class TestSyncUser:
    def test_creates_mirror(self):
        _sync(phone="+919999999999")
        user = find_user("user_2abc")
        assert user.email == "asha@example.com"
        assert user.phone == "+919999999999"

    def test_second_sync_updates_in_place(self):
        first_id = _sync()
        second_id = _sync(email="Asha.New@Example.com", name="Asha R")

        assert first_id == second_id
        assert _user_count() == 1
        user = find_user("user_2abc")
        assert user.email == "asha.new@example.com"
        assert user.name == "Asha R"

    def test_sync_keeps_storefront_lists(self):
        _sync()
        user = find_user("user_2abc")
        user.add_to_wishlist("p1")
        user.record_order("o1")
        current_domain.repository_for(User).add(user)

        _sync(name="Asha R")
        user = find_user("user_2abc")
        assert user.wishlist_ids == ["p1"]
        assert user.order_ids == ["o1"]


class TestRemoveUser:
    def test_removes_mirror(self):
        _sync()
        current_domain.process(RemoveUser(external_id="user_2abc"), asynchronous=False)
        assert find_user("user_2abc") is None

    def test_unknown_user_is_noop(self):
        assert current_domain.process(RemoveUser(external_id="user_none"), asynchronous=False) is None


class TestEnsureUser:
    def test_creates_from_session_claims(self):
        user = ensure_user(Identity(subject="user_2new", email="New@Example.com", first_name="Ravi"))
        assert user.external_id == "user_2new"
        assert user.email == "new@example.com"
        assert user.name == "Ravi"
        assert find_user("user_2new") is not None

    def test_returns_existing_mirror(self):
        _sync()
        user = ensure_user(Identity(subject="user_2abc", email="other@example.com"))
        assert user.email == "asha@example.com"
        assert _user_count() == 1

    def test_session_without_email_claim(self):
        first = ensure_user(Identity(subject="user_2bare"))
        second = ensure_user(Identity(subject="user_2bare2"))
        assert first.email is None
        assert second.email is None
        assert find_user("user_2bare") is not None
        assert find_user("user_2bare2") is not None

    def test_sync_without_email(self):
        _sync(external_id="user_2phone", email=None)
        assert find_user("user_2phone").email is None
