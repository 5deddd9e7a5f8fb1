import base64
import os
import time
from pathlib import Path

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from jose import jwt

JWT_SECRET = "test-session-secret"
PAYMENT_SECRET = "test-gateway-secret"
WEBHOOK_SECRET = "whsec_" + base64.b64encode(b"test-webhook-signing-key").decode()


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["IDENTITY_JWT_SECRET"] = JWT_SECRET
    os.environ["IDENTITY_JWT_ALGORITHMS"] = "HS256"
    os.environ["RAZORPAY_SECRET"] = PAYMENT_SECRET
    os.environ["IDENTITY_WEBHOOK_SECRET"] = WEBHOOK_SECRET
    os.environ["PAYMENT_GATEWAY"] = "fake"
    os.environ["ASSET_STORE"] = "fake"

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def gateway():
    from storefront.payments.gateway import reset_gateway, set_gateway
    from storefront.payments.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture(autouse=True)
def asset_store():
    from storefront.media import reset_asset_store, set_asset_store
    from storefront.media.fake_adapter import FakeAssetStore

    fake = FakeAssetStore()
    set_asset_store(fake)
    yield fake
    reset_asset_store()


# ---------------------------------------------------------------------------
# Identities and sessions
# ---------------------------------------------------------------------------
@pytest.fixture()
def identity():
    from storefront.identity.session import Identity

    return Identity(
        subject="user_2buyer",
        email="asha.rao@example.com",
        first_name="Asha",
        last_name="Rao",
        image_url="https://img.example.test/asha.png",
    )


def session_token(subject="user_2buyer", **claims):
    payload = {"sub": subject, "exp": int(time.time()) + 3600, **claims}
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


@pytest.fixture()
def make_token():
    return session_token


@pytest.fixture()
def auth_headers():
    token = session_token(
        email="asha.rao@example.com",
        first_name="Asha",
        last_name="Rao",
        image_url="https://img.example.test/asha.png",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_headers():
    token = session_token(subject="user_2other", email="ravi@example.com", first_name="Ravi")
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Catalogue data
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_category():
    from protean.utils.globals import current_domain

    from storefront.catalogue.category.category import Category

    def _make(name="Drawing Room", **overrides):
        defaults = {"name": name, "description": f"{name} furniture"}
        defaults.update(overrides)
        category = Category.create(**defaults)
        current_domain.repository_for(Category).add(category)
        return category

    return _make


@pytest.fixture()
def make_product(make_category):
    from protean.utils.globals import current_domain

    from storefront.catalogue.product.product import Product

    categories = {}

    def _make(name="Teak Sofa", category_name="Drawing Room", **overrides):
        if category_name not in categories:
            categories[category_name] = make_category(name=category_name)
        category = categories[category_name]
        defaults = {
            "name": name,
            "description": "Solid wood",
            "category_id": category.id,
            "category_name": category.name,
            "price_original": 1000.0,
            "stock": 10,
        }
        defaults.update(overrides)
        product = Product.create(**defaults)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def make_service():
    from protean.utils.globals import current_domain

    from storefront.catalogue.service.service import Service

    def _make(name="Home Design Consultation", **overrides):
        defaults = {
            "name": name,
            "category": "Consultation",
            "description": "A session with a designer",
            "price": "Rs 1,500 per session",
            "whats_included": ["Site visit"],
        }
        defaults.update(overrides)
        service = Service.create(**defaults)
        current_domain.repository_for(Service).add(service)
        return service

    return _make


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from storefront.api.handlers import register_exception_handlers
    from storefront.catalogue.api import category_router, featured_router, product_router, service_router
    from storefront.domain import storefront
    from storefront.identity.api import webhook_router
    from storefront.leads.api import lead_router
    from storefront.ordering.api import cart_router, order_router, payment_router
    from storefront.wishlist.api import wishlist_router

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    for router in (
        product_router,
        category_router,
        service_router,
        featured_router,
        order_router,
        payment_router,
        cart_router,
        wishlist_router,
        lead_router,
        webhook_router,
    ):
        app.include_router(router, prefix="/api")
    register_exception_handlers(app)

    return TestClient(app, raise_server_exceptions=False)
