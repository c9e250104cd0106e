"""
Smoke tests for the main blueprint routes.

These verify that the application starts up correctly and that the host
view and health check endpoints respond.
"""


class TestHostView:
    """Tests for the host view."""

    def test_root_mounts_department_panel(self, client):
        """The root URL should redirect to the default tab."""
        response = client.get("/")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/departments/")

    def test_host_page_contains_title_and_tabs(self, client):
        response = client.get("/", follow_redirects=True)
        assert response.status_code == 200
        assert b"Department and Employee Management" in response.data
        assert b'id="management-tabs"' in response.data

    def test_unknown_page_returns_404(self, client):
        assert client.get("/no-such-page").status_code == 404


class TestHealthCheck:
    """Tests for the health check endpoint."""

    def test_health_check_returns_200(self, client):
        """The health check should return HTTP 200 when the API answers."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "healthy", "api": "reachable"}

    def test_health_check_reports_unreachable_api(self, client, fake_api):
        fake_api.fail_on("GET", "/departments", 502)
        response = client.get("/health")
        assert response.status_code == 503
        assert response.get_json()["api"] == "Request failed with status code 502"
