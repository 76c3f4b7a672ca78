"""Thin REST clients for the Drive and Docs APIs."""
from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .config import DOCS_API_URL, DRIVE_API_URL, http_timeout_seconds, resolve_access_token
from .errors import ApiError

USER_AGENT = "docseed/1.0"


class GoogleApiClient:
    def __init__(self, access_token: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self._access_token = access_token
        self.timeout = timeout if timeout is not None else http_timeout_seconds()

    def _headers(self) -> Dict[str, str]:
        token = self._access_token or resolve_access_token()
        if not token:
            raise ApiError(401, "No Google access token configured (set DOCSEED_ACCESS_TOKEN or DOCSEED_TOKEN_FILE)")
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _post(self, url: str, body: Dict[str, Any], params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = self._headers()
        try:
            response = requests.post(url, json=body, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ApiError(None, str(exc)) from exc
        if not response.ok:
            raise ApiError(response.status_code, _error_text(response))
        if not response.content:
            return {}
        return response.json()


class DriveClient(GoogleApiClient):
    def create_file(
        self,
        metadata: Dict[str, Any],
        fields: str = "id,name,webViewLink",
        supports_all_drives: bool = True,
    ) -> Dict[str, Any]:
        params = {"fields": fields, "supportsAllDrives": "true" if supports_all_drives else "false"}
        return self._post(f"{DRIVE_API_URL}/files", metadata, params=params)


class DocsClient(GoogleApiClient):
    def batch_update(self, document_id: str, requests_: List[Dict[str, Any]]) -> Dict[str, Any]:
        url = f"{DOCS_API_URL}/documents/{quote(document_id, safe='')}:batchUpdate"
        return self._post(url, {"requests": requests_})


def _error_text(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return response.reason or f"HTTP {response.status_code}"
