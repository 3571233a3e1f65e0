import pytest
from apparel.api import admin_router, storefront_router, webhook_router
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(storefront_router)
    app.include_router(admin_router)
    app.include_router(webhook_router)
    return TestClient(app)


@pytest.fixture()
def shipping_body():
    return {
        "name": "Ada Lovelace",
        "address": "12 St James's Square",
        "city": "London",
        "zip_code": "SW1Y 4JH",
        "country": "GB",
        "email": "ada@example.com",
    }
