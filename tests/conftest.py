"""
Pytest configuration and shared fixtures.

Provides a test application whose roster API client talks to an
in-memory fake of the REST API instead of the network.  The fake
implements urllib3's ``request()`` signature, so the real
``RosterApiClient`` (encoding, status handling, error mapping) is
exercised end to end.
"""

import itertools
import json
import re
from urllib.parse import urlsplit

import pytest

from roster import create_app
from roster.services.api_client import RosterApiClient


class FakeResponse:
    """Just enough of ``urllib3.HTTPResponse`` for the client."""

    def __init__(self, status: int, payload=None) -> None:
        self.status = status
        self.data = b"" if payload is None else json.dumps(payload).encode("utf-8")


class FakeRosterApi:
    """
    In-memory department/employee API.

    Records are stored in their wire shape (``d_no``, ``e_name``, ...).
    Every request is recorded in ``calls`` as ``(method, path, body)``.
    ``fail_on()`` makes a given method and path answer with an error
    status or raise a transport exception.
    """

    def __init__(self) -> None:
        self.departments: dict[int, dict] = {}
        self.employees: dict[int, dict] = {}
        self.calls: list[tuple] = []
        self.failures: dict[tuple[str, str], object] = {}
        self._department_ids = itertools.count(1)
        self._employee_ids = itertools.count(101)

    # -- Seeding -----------------------------------------------------------

    def add_department(self, name: str, hod: str) -> dict:
        record = {"d_no": next(self._department_ids), "d_name": name, "dept_hod": hod}
        self.departments[record["d_no"]] = record
        return record

    def add_employee(self, name: str, department_id: int, **fields) -> dict:
        record = {
            "e_no": next(self._employee_ids),
            "e_name": name,
            "salary": fields.get("salary", 50000),
            "d_no": department_id,
            "mgr_no": fields.get("mgr_no", "1"),
            "date_of_join": fields.get("date_of_join", "2023-01-15T00:00:00.000Z"),
            "designation": fields.get("designation", "Engineer"),
        }
        self.employees[record["e_no"]] = record
        return record

    def fail_on(self, method: str, path: str, failure=500) -> None:
        """Make ``method path`` return ``failure`` (a status) or raise it."""
        self.failures[(method, path)] = failure

    def calls_to(self, method: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == method]

    # -- urllib3 interface -------------------------------------------------

    def request(self, method, url, body=None, headers=None, **kwargs):
        path = urlsplit(url).path
        data = json.loads(body) if body else None
        self.calls.append((method, path, data))

        failure = self.failures.get((method, path))
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return FakeResponse(failure, {"message": "server error"})

        parts = path.strip("/").split("/")
        collection = parts[0]
        record_id = int(parts[1]) if len(parts) > 1 else None

        if collection == "departments":
            return self._departments(method, record_id, data)
        if collection == "employees":
            return self._employees(method, record_id, data)
        return FakeResponse(404, {"message": "not found"})

    def _departments(self, method, record_id, data):
        if method == "GET" and record_id is None:
            return FakeResponse(200, list(self.departments.values()))
        if method == "POST" and record_id is None:
            record = {"d_no": next(self._department_ids), **data}
            self.departments[record["d_no"]] = record
            return FakeResponse(201, record)
        if record_id not in self.departments:
            return FakeResponse(404, {"message": "department not found"})
        if method == "PATCH":
            self.departments[record_id].update(data)
            return FakeResponse(200, self.departments[record_id])
        if method == "DELETE":
            del self.departments[record_id]
            return FakeResponse(200)
        return FakeResponse(405, {"message": "method not allowed"})

    def _employees(self, method, record_id, data):
        if method == "GET" and record_id is None:
            listed = [
                {**emp, "department": self.departments.get(emp["d_no"])}
                for emp in self.employees.values()
            ]
            return FakeResponse(200, listed)
        if method == "POST" and record_id is None:
            record = {"e_no": next(self._employee_ids), **data}
            self.employees[record["e_no"]] = record
            return FakeResponse(201, record)
        if record_id not in self.employees:
            return FakeResponse(404, {"message": "employee not found"})
        if method == "PUT":
            self.employees[record_id] = {"e_no": record_id, **data}
            return FakeResponse(200, self.employees[record_id])
        if method == "DELETE":
            del self.employees[record_id]
            return FakeResponse(204)
        return FakeResponse(405, {"message": "method not allowed"})


@pytest.fixture
def fake_api():
    """A fresh, empty fake roster API for each test."""
    return FakeRosterApi()


@pytest.fixture
def app(fake_api):  # pylint: disable=redefined-outer-name
    """
    Create a Flask application configured for testing.

    The API client is swapped for one backed by ``fake_api``.  No
    application context is pushed here so that each test-client request
    gets its own ``g``; service tests use ``app_ctx``.
    """
    app = create_app("testing")
    app.extensions["roster_api"] = RosterApiClient(
        app.config["ROSTER_API_BASE_URL"],
        timeout=app.config["ROSTER_API_TIMEOUT"],
        http=fake_api,
    )
    yield app


@pytest.fixture
def app_ctx(app):  # pylint: disable=redefined-outer-name
    """Push an application context for tests that call services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):  # pylint: disable=redefined-outer-name
    """
    Provide a Flask test client for making HTTP requests.

    Usage in tests::

        def test_panel(client):
            response = client.get("/departments/")
            assert response.status_code == 200
    """
    with app.test_client() as test_client:
        yield test_client


_FORM_TOKEN = re.compile(r'name="form_token" value="([^"]+)"')


def form_token_from(response) -> str:
    """Pull the single-use form token out of a rendered panel."""
    match = _FORM_TOKEN.search(response.get_data(as_text=True))
    assert match, "rendered page carries no form token"
    return match.group(1)


@pytest.fixture
def read_form_token():
    """Fixture form of ``form_token_from`` for route tests."""
    return form_token_from
