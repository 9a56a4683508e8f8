"""
docsearch/client.py

Minimal HTTP client for a running docsearch server.

    client = SearchClient("http://127.0.0.1:6969")
    for hit in client.search("bind texture to buffer", limit=5):
        print(hit["documentId"], hit["score"])
"""

import requests

from docsearch.config import CLIENT_TIMEOUT
from docsearch.errors import DocsearchError


class ClientError(DocsearchError):
    """The server could not be reached or answered with an error."""


class SearchClient:
    def __init__(self, base_url: str, timeout: float = CLIENT_TIMEOUT, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(self, query: str, limit: int | None = None) -> list[dict]:
        """
        POST the query to /api/search and return the result list
        ([{"documentId": str, "score": float}, ...]).
        Raises ClientError on transport failures and non-2xx answers.
        """
        payload = {"query": query}
        if limit is not None:
            payload["limit"] = limit
        url = f"{self.base_url}/api/search"
        try:
            r = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise ClientError(f"request to {url} failed: {e}") from e

        if not r.ok:
            try:
                detail = r.json().get("error", r.text)
            except ValueError:
                detail = r.text
            raise ClientError(f"{url} answered {r.status_code}: {detail}")
        return r.json()["results"]

    def health(self) -> dict:
        url = f"{self.base_url}/health"
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise ClientError(f"request to {url} failed: {e}") from e
        return r.json()
