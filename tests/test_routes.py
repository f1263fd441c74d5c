"""Tests for the HTTP routes."""

from src.api.app import create_app
from src.catalog import Dataset


def test_index_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.get_json()["endpoints"]["cars"] == "/api/cars"


def test_list_cars_defaults(client):
    payload = client.get("/api/cars").get_json()

    assert payload["pagination"] == {"page": 1, "limit": 50, "total": 7, "totalPages": 1}
    assert payload["data"][0]["carName"] == "toyota corolla 1200"
    assert payload["filters"]["sortOrder"] == "desc"


def test_list_cars_with_filters(client):
    response = client.get(
        "/api/cars",
        query_string={"search": "o", "cylinders": "4", "minMpg": "null", "sortBy": "mpg", "sortOrder": "asc"},
    )
    payload = response.get_json()

    assert response.status_code == 200
    assert [car["carName"] for car in payload["data"]] == [
        "ford pinto",
        "volkswagen 1131 deluxe sedan",
        "opel 1900",
        "toyota corolla 1200",
    ]
    assert payload["filters"]["minMpg"] is None


def test_malformed_paging_is_not_an_error(client):
    response = client.get("/api/cars?page=abc&limit=-5")

    assert response.status_code == 200
    assert response.get_json()["pagination"]["limit"] == 50


def test_page_beyond_end_is_empty(client):
    payload = client.get("/api/cars?page=5&limit=3").get_json()

    assert payload["data"] == []
    assert payload["pagination"]["total"] == 7
    assert payload["pagination"]["totalPages"] == 3


def test_configured_page_size(sample_csv):
    app = create_app({"TESTING": True, "DATA_PATH": sample_csv, "DEFAULT_PAGE_SIZE": 2})
    payload = app.test_client().get("/api/cars").get_json()

    assert payload["pagination"]["limit"] == 2
    assert len(payload["data"]) == 2


def test_get_car(client):
    response = client.get("/api/cars/5")
    payload = response.get_json()

    assert response.status_code == 200
    assert payload["carName"] == "ford pinto"
    assert payload["horsepower"] is None
    assert payload["originName"] == "USA"


def test_get_car_not_found(client):
    for path in ("/api/cars/999", "/api/cars/0", "/api/cars/abc", "/api/cars/%C2%B2"):
        response = client.get(path)
        assert response.status_code == 404
        assert response.get_json() == {"error": "Car not found"}


def test_statistics(client):
    payload = client.get("/api/statistics").get_json()

    assert payload["totalCars"] == 7
    assert payload["avgMpg"] == 24.29
    assert payload["originDistribution"] == {"USA": 3, "Europe": 2, "Japan": 2}


def test_statistics_on_empty_dataset(empty_client):
    response = empty_client.get("/api/statistics")
    payload = response.get_json()

    assert response.status_code == 200
    assert payload["totalCars"] == 0
    assert payload["noData"] is True
    assert payload["avgMpg"] is None


def test_visualizations(client):
    by_year = client.get("/api/visualizations/mpg-by-year").get_json()
    by_cylinders = client.get("/api/visualizations/mpg-by-cylinders").get_json()

    assert [entry["year"] for entry in by_year] == [1970, 1971]
    assert [entry["cylinders"] for entry in by_cylinders] == [4, 8]


def test_health(client):
    payload = client.get("/api/health").get_json()

    assert payload["status"] == "OK"
    assert payload["carsLoaded"] == 7
    assert "timestamp" in payload


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_unexpected_failure_is_generic_500(sample_csv, monkeypatch):
    app = create_app({"DATA_PATH": sample_csv})

    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("src.api.routes.compute_statistics", explode)
    response = app.test_client().get("/api/statistics")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal server error"}


def test_dataset_handle_is_shared(sample_csv):
    dataset = Dataset()
    app = create_app({"TESTING": True}, dataset=dataset)
    assert app.extensions["car_dataset"] is dataset


def test_cors_allows_default_frontend_origin(client):
    response = client.get("/api/cars", headers={"Origin": "http://localhost:3000"})

    assert response.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"
    assert response.headers.get("Access-Control-Allow-Credentials") == "true"


def test_cors_allows_render_frontend(client):
    origin = "https://fuel-economy-frontend-abc1.onrender.com"
    response = client.get("/api/statistics", headers={"Origin": origin})

    assert response.headers.get("Access-Control-Allow-Origin") == origin


def test_cors_rejects_unknown_origin(client):
    response = client.get("/api/cars", headers={"Origin": "http://evil.example"})

    assert response.status_code == 200
    assert "Access-Control-Allow-Origin" not in response.headers


def test_cors_origins_are_configurable(sample_csv):
    app = create_app({"TESTING": True, "DATA_PATH": sample_csv, "CORS_ORIGINS": ["https://cars.example"]})
    client = app.test_client()

    allowed = client.get("/api/health", headers={"Origin": "https://cars.example"})
    default = client.get("/api/health", headers={"Origin": "http://localhost:3000"})

    assert allowed.headers.get("Access-Control-Allow-Origin") == "https://cars.example"
    assert "Access-Control-Allow-Origin" not in default.headers
