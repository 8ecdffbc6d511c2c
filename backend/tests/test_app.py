def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_root(client):
    body = client.get("/").json()

    assert body["message"] == "Dictionary API"
    assert body["docs"] == "/docs"


def test_public_config(client):
    body = client.get("/config").json()

    assert body["cefr_levels"] == ["A1", "A2", "B1", "B2", "C1", "C2"]
    assert body["limits"]["cefr_default_page_size"] == 10
    assert body["limits"]["query_max_limit"] >= 1


def test_missing_parameter_is_bad_request_with_details(client):
    response = client.get("/cefr-words")

    assert response.status_code == 400
    errors = response.json()["detail"]
    assert any("levels" in error["loc"] for error in errors)


def test_cors_headers(client):
    response = client.get("/health", headers={"Origin": "http://example.com"})

    assert response.headers["access-control-allow-origin"] == "*"
