"""
HTTP client for the catalog API.

Handles:
- Authentication via the x-api-token header
- Retry logic for network errors, 5xx responses and an unavailable database
- Pagination over collection endpoints
"""

import time
from typing import Any, Dict, Iterable, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import Config
from .utils import setup_logger


class CatalogClientError(Exception):
    """Non-retryable or exhausted API failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class CatalogClient:
    """
    Talks to a running catalog API.

    Responsibilities:
    - Session setup with transport-level retries for idempotent requests
    - Application-level retries with linear backoff (seeding runs against
      servers that may still be starting, or whose database is not up yet)
    """

    PAGE_SIZE = 1000

    def __init__(self, config: Config, base_url: Optional[str] = None):
        self.config = config
        self.base_url = (base_url or config.api_base_url).rstrip("/")
        self.session = self._create_session()
        self.logger = setup_logger("client", config.log_dir)

    def _create_session(self) -> requests.Session:
        """Create requests session with retry configuration."""
        session = requests.Session()

        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[502, 504],
            allowed_methods=["GET", "PUT", "DELETE"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        session.headers.update(self.config.get_headers())

        return session

    def _retry_delay(self, attempt: int) -> float:
        return self.config.seed_retry_delay * attempt

    def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict] = None,
        allow_statuses: Iterable[int] = (),
    ) -> requests.Response:
        """
        Send a request, retrying transient failures.

        Args:
            method: HTTP verb
            path: Path below the base URL (e.g. '/shows')
            json: Optional JSON body
            params: Query parameters
            allow_statuses: Extra non-2xx statuses returned without raising

        Returns:
            The final response

        Raises:
            CatalogClientError: On a client error or when retries run out
        """
        url = f"{self.base_url}{path}"
        max_retries = max(1, self.config.seed_max_retries)
        allowed = set(allow_statuses)

        for attempt in range(1, max_retries + 1):
            try:
                response = self.session.request(method, url, json=json, params=params, timeout=60)
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                if attempt == max_retries:
                    raise CatalogClientError(f"{method} {path} failed: {e}") from e
                delay = self._retry_delay(attempt)
                self.logger.warning(
                    f"Network error for {method} {path}, retrying in {delay:.1f}s "
                    f"(attempt {attempt}/{max_retries})"
                )
                time.sleep(delay)
                continue

            if response.ok or response.status_code in allowed:
                return response

            if response.status_code >= 500 and attempt < max_retries:
                delay = self._retry_delay(attempt)
                self.logger.warning(
                    f"Server error ({response.status_code}) for {method} {path}, "
                    f"retrying in {delay:.1f}s (attempt {attempt}/{max_retries})"
                )
                time.sleep(delay)
                continue

            body = self._body(response)
            message = body.get("message") if isinstance(body, dict) else None
            raise CatalogClientError(
                f"{method} {path} returned {response.status_code}: {message or response.text[:200]}",
                status_code=response.status_code,
                body=body,
            )

        raise CatalogClientError(f"{method} {path} failed after {max_retries} attempts")

    @staticmethod
    def _body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _get_all(self, path: str, params: Optional[dict] = None) -> List[dict]:
        """Follow limit/offset pagination to the end of a collection."""
        items: List[dict] = []
        offset = 0
        while True:
            page_params = {**(params or {}), "limit": self.PAGE_SIZE, "offset": offset}
            body = self._request("GET", path, params=page_params).json()
            items.extend(body["data"])
            if not body["pagination"]["has_next"]:
                return items
            offset += self.PAGE_SIZE

    # ============ SERVICE ============

    def health(self) -> dict:
        return self._request("GET", "/health").json()

    def init_database(self) -> bool:
        """Ensure the schema exists; servers without /init are fine."""
        response = self._request("POST", "/init", allow_statuses=(404,))
        if response.status_code == 404:
            self.logger.info("[init] Skipped or not supported")
            return False
        self.logger.info("[init] Database ensured")
        return True

    # ============ CATALOG ============

    def find_show(self, title: str, year: Optional[int]) -> Optional[dict]:
        params: Dict[str, Any] = {"title": title}
        if year is not None:
            params["year"] = year
        shows = [s for s in self._get_all("/shows", params) if s["year"] == year]
        return shows[0] if shows else None

    def delete_show(self, show_id: int) -> bool:
        response = self._request("DELETE", f"/shows/{show_id}", allow_statuses=(404,))
        return response.status_code != 404

    def list_show_characters(self, show_id: int) -> List[dict]:
        return self._get_all(f"/shows/{show_id}/characters")

    def find_actor(self, name: str) -> Optional[dict]:
        actors = self._get_all("/actors", {"name": name})
        return actors[0] if actors else None

    def list_actor_characters(self, actor_id: int) -> List[dict]:
        return self._get_all(f"/actors/{actor_id}/characters")

    def delete_actor(self, actor_id: int) -> bool:
        response = self._request("DELETE", f"/actors/{actor_id}", allow_statuses=(404,))
        return response.status_code != 404

    # ============ ADMIN ============

    def import_snapshot(self, snapshot: dict) -> dict:
        return self._request("POST", "/admin/database-import", json=snapshot).json()

    def dump(self) -> dict:
        return self._request("GET", "/admin/database-dump").json()

    def reset_database(self) -> dict:
        return self._request("POST", "/admin/reset-database").json()
