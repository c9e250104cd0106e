"""
Roster API client: handles all communication with the department and
employee REST API.

The API is an external collaborator: it owns the record store, assigns
identifiers and embeds each employee's department in list responses.
This client only knows how to send JSON to a path and hand back the
decoded JSON, turning every transport failure and every non-2xx answer
into a single ``ApiError`` whose message is suitable for display.

The client is created once per application by the ``RosterApi``
extension (see ``roster/extensions.py``) from:
    - ``ROSTER_API_BASE_URL``: e.g. ``http://localhost:8000``
    - ``ROSTER_API_TIMEOUT``:  seconds for connect and read.

No authentication headers, query parameters or retries are sent.
"""

import json
import logging
from typing import Any

import urllib3

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    A request to the roster API failed.

    Transport failures (connection refused, timeout) and non-2xx
    responses are not distinguished by callers; both are
    "the request failed" and ``str(exc)`` is the text shown to users.

    Attributes:
        status: HTTP status code for non-2xx responses, else None.
        method: HTTP method of the failed request.
        path:   API path of the failed request.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        method: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.method = method
        self.path = path


class RosterApiClient:
    """
    Thin JSON-over-HTTP client for the roster REST API.

    Usage::

        client = RosterApiClient("http://localhost:8000")
        departments = client.get("/departments")
        client.patch("/departments/4", {"d_name": "Finance"})

    Args:
        base_url: Scheme, host and optional prefix of the API.
        timeout:  Connect and read timeout in seconds.
        http:     Object exposing urllib3's ``request()`` signature.
                  Defaults to a ``urllib3.PoolManager``; tests pass an
                  in-memory fake.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http: Any | None = None,
    ) -> None:
        self.base_url: str = base_url.rstrip("/")
        self.timeout = urllib3.Timeout(connect=timeout, read=timeout)
        self.headers: dict[str, str] = {"Accept": "application/json"}

        # Shared by every request thread of the WSGI server.
        self._http = http or urllib3.PoolManager(
            timeout=self.timeout,
            retries=False,
        )

        logger.debug(
            "RosterApiClient initialized: base_url=%s, timeout=%ss",
            self.base_url,
            timeout,
        )

    # =================================================================
    # Public API
    # =================================================================

    def get(self, path: str) -> Any:
        """Send a GET request and return the decoded JSON body."""
        return self._request("GET", path)

    def post(self, path: str, body: dict[str, Any]) -> Any:
        """Send a POST request with a JSON body."""
        return self._request("POST", path, body)

    def patch(self, path: str, body: dict[str, Any]) -> Any:
        """Send a PATCH request with a partial JSON body."""
        return self._request("PATCH", path, body)

    def put(self, path: str, body: dict[str, Any]) -> Any:
        """Send a PUT request with a full JSON body."""
        return self._request("PUT", path, body)

    def delete(self, path: str) -> Any:
        """Send a DELETE request.  Most APIs answer with an empty body."""
        return self._request("DELETE", path)

    # =================================================================
    # HTTP transport
    # =================================================================

    def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send one HTTP request to the roster API.

        Args:
            method: HTTP verb.
            path:   Path relative to ``base_url`` (leading slash optional).
            body:   JSON-serializable request body, if any.

        Returns:
            The decoded JSON response, or None for an empty body.

        Raises:
            ApiError: On a request body that cannot be sent as strict
                      JSON, transport failure, non-2xx status or a
                      response body that is not valid JSON.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = dict(self.headers)
        encoded = None
        if body is not None:
            try:
                encoded = json.dumps(body, allow_nan=False).encode("utf-8")
            except ValueError as exc:
                logger.error("Unencodable body for roster API %s %s: %s", method, path, exc)
                raise ApiError(
                    f"Request body for {path} is not valid JSON", method=method, path=path
                ) from exc
            headers["Content-Type"] = "application/json"

        logger.debug("Roster API %s %s", method, url)

        try:
            response = self._http.request(
                method,
                url,
                body=encoded,
                headers=headers,
                timeout=self.timeout,
                retries=False,
            )
        except urllib3.exceptions.RequestError as exc:
            logger.error("RequestError calling roster API %s %s: %s", method, path, exc)
            raise ApiError(str(exc), method=method, path=path) from exc
        except urllib3.exceptions.HTTPError as exc:
            logger.error("HTTPError calling roster API %s %s: %s", method, path, exc)
            raise ApiError(str(exc), method=method, path=path) from exc

        if not 200 <= response.status < 300:
            logger.error(
                "Roster API %s %s returned status %d",
                method,
                path,
                response.status,
            )
            raise ApiError(
                f"Request failed with status code {response.status}",
                status=response.status,
                method=method,
                path=path,
            )

        if not response.data:
            return None

        try:
            return json.loads(response.data)
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON from roster API %s %s: %s", method, path, exc)
            raise ApiError(
                f"Invalid JSON in response from {path}",
                status=response.status,
                method=method,
                path=path,
            ) from exc
