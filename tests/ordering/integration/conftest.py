import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    from backoffice.api import router as staff_router
    from ordering.api.errors import register_error_handlers
    from ordering.api.routes import catalog_router, order_router
    from ordering.domain import ordering

    app = FastAPI()

    @app.middleware("http")
    async def domain_context(request, call_next):
        with ordering.domain_context():
            return await call_next(request)

    app.include_router(catalog_router)
    app.include_router(order_router)
    app.include_router(staff_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def staff_headers(client):
    response = client.post("/staff/login", json={"username": "admin", "password": "sukses123"})
    assert response.status_code == 200
    return {"X-Staff-Token": response.json()["token"]}
