def test_health(client) -> None:
    response = client.get("/health")
    v1_response = client.get("/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert v1_response.status_code == 200
    assert v1_response.json()["status"] == "ok"


def test_root_banner(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]
