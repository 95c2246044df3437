class TestHealth:

    def test_ping(self, client):
        assert client.get("/api/ping").get_json() == {"message": "ping"}

    def test_health_checks_database(self, client):
        body = client.get("/api/health").get_json()
        assert body["success"] is True
        assert body["data"]["status"] == "connected"

    def test_content_security_policy_header(self, client):
        assert "default-src" in client.get("/api/ping").headers["Content-Security-Policy"]

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.get_json()["success"] is False
