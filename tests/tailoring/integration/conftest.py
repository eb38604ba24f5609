import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tailoring.api import include_routers, register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    include_routers(app)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def as_admin(admin_id):
    return {"X-User-Id": admin_id, "X-User-Role": "admin"}


@pytest.fixture()
def as_customer(customer_id):
    return {"X-User-Id": customer_id, "X-User-Role": "customer", "X-User-Email": "rahim@example.com"}


@pytest.fixture()
def as_tailor(tailor_id):
    return {"X-User-Id": tailor_id, "X-User-Role": "tailor"}
