"""
HTTP client for the remote list service.

The service sits behind a tunneling proxy that answers browser-like requests
with an interstitial page unless the bypass header is present, so every
request made through ``build_session`` carries it.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from ..errors import NetworkError
from .models import Student

_LOG = logging.getLogger(__name__)

BYPASS_HEADER = "ngrok-skip-browser-warning"
BYPASS_VALUE = "true"

_STUDENT_LIST = TypeAdapter(List[Student])


def build_session(bypass_header: str = BYPASS_HEADER, bypass_value: str = BYPASS_VALUE) -> requests.Session:
    """Build a requests session that always sends the proxy bypass header."""
    session = requests.Session()
    session.headers.update({bypass_header: bypass_value})
    return session


class StudentsClient:
    """Reads and appends entries of the remote ``/students`` collection."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        students_path: str = "/students",
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or build_session()
        self.students_path = "/" + students_path.lstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.students_path}"

    def list_students(self) -> List[Student]:
        """Fetch the full list, in the order the service returns it.

        Raises:
            NetworkError: On transport errors, non-2xx responses or a payload
                that is not a list of entries
        """
        resp = self._request("GET", self.url)
        try:
            return _STUDENT_LIST.validate_python(resp.json())
        except (ValueError, PydanticValidationError) as e:
            raise NetworkError(f"Malformed list payload from {self.url}: {e}") from e

    def create_student(self, payload: Dict[str, Any]) -> None:
        """Append one entry. The response body is not used.

        Raises:
            NetworkError: On transport errors or non-2xx responses
        """
        self._request("POST", self.url, json=payload)

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise NetworkError(f"{method} {url} failed with status {status}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e
        _LOG.debug("%s %s -> %s", method, url, resp.status_code)
        return resp
