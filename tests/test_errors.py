from fastapi.testclient import TestClient
from cafehub.main import app

client = TestClient(app, raise_server_exceptions=False)

def test_root_welcome():
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Welcome to CafeHub Server"
    assert response.headers["content-type"].startswith("text/plain")

def test_404_not_found():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "message" in data
    assert data["code"] == "HTTP_ERROR"

def test_validation_error_structure(client):
    # A JSON array where a document object is expected
    response = client.post("/coffees", json=["not", "a", "document"])
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert len(data["error"]) > 0

def test_custom_exception():
    from cafehub.core.exceptions import ResourceNotFoundError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ResourceNotFoundError(message="Item not found")

    response = client.get("/test-custom-error")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["message"] == "Item not found"

def test_unhandled_downstream_failure_is_500():
    from cafehub.db.mongo import get_coffees_collection

    class BrokenCollection:
        def find(self, *args, **kwargs):
            raise RuntimeError("connection reset")

    app.dependency_overrides[get_coffees_collection] = lambda: BrokenCollection()
    try:
        response = client.get("/coffees")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "INTERNAL_ERROR"
    assert data["message"] == "connection reset"

def test_live_probe():
    response = client.get("/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}

def test_health_reports_unhealthy_without_database():
    response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["checks"]["database"] == "unhealthy"

def test_unhandled_failure_keeps_cors_headers():
    from cafehub.db.mongo import get_coffees_collection

    class BrokenCollection:
        def find(self, *args, **kwargs):
            raise RuntimeError("connection reset")

    app.dependency_overrides[get_coffees_collection] = lambda: BrokenCollection()
    try:
        response = client.get("/coffees", headers={"Origin": "https://cafehub.example"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.headers["access-control-allow-origin"] == "https://cafehub.example"
    assert response.json()["code"] == "INTERNAL_ERROR"
