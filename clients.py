"""API client for the GitHub gist holding the remote report."""

from datetime import datetime

import requests

from errors import TransportError
from models import RemoteReport
from patterns import Patterns

API_ROOT = "https://api.github.com"
USER_AGENT = "hours-tracker"


def _handle_api_error(response: requests.Response, service: str) -> str:
    """Convert HTTP errors to user-friendly messages."""
    status = response.status_code

    messages = {
        401: f"{service}: Authentication failed. Check your API token!",
        403: f"{service}: Access denied. Check the token's gist scope!",
        404: f"{service}: Gist not found. Check gist.gist_id in your config!",
        422: f"{service}: Update rejected. The report content was not accepted.",
        429: f"{service}: Too many requests. Wait a moment and try again.",
        500: f"{service}: Server error. The service may be temporarily unavailable.",
        502: f"{service}: Bad gateway. The service may be temporarily unavailable.",
        503: f"{service}: Service unavailable. Try again later.",
    }

    return messages.get(status, f"{service}: HTTP {status} - {response.reason}")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp with a Z suffix or an explicit offset."""
    parsed = datetime.fromisoformat(Patterns.UTC_SUFFIX.sub("+00:00", value))
    if parsed.tzinfo is None:
        raise ValueError(f"Timestamp '{value}' has no UTC offset")
    return parsed


class GistClient:
    """Client for the GitHub gists REST API."""

    def __init__(
        self, api_token: str, gist_id: str, file_name: str = "hours", base_url: str = API_ROOT
    ):
        self.token = api_token
        self.gist_id = gist_id
        self.file_name = file_name
        self.base_url = base_url

    @property
    def url(self) -> str:
        return f"{self.base_url}/gists/{self.gist_id}"

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }

    def get(self) -> RemoteReport:
        """Fetch the report and its last update time."""
        try:
            r = requests.get(self.url, headers=self._headers(), timeout=10)
        except requests.exceptions.ConnectionError:
            raise TransportError(f"Gist: Cannot connect to {self.base_url}. Check your network!")
        except requests.exceptions.Timeout:
            raise TransportError("Gist: Connection timed out. The server may be slow.")

        if not r.ok:
            raise TransportError(_handle_api_error(r, "Gist"), r.status_code)

        try:
            data = r.json()
        except ValueError:
            raise TransportError("Gist: Response is not valid JSON.", r.status_code)

        if not isinstance(data, dict):
            raise TransportError("Gist: Unexpected response format.", r.status_code)

        file = (data.get("files") or {}).get(self.file_name)
        if not isinstance(file, dict) or file.get("content") is None:
            raise TransportError(f"Gist: No file '{self.file_name}' in gist {self.gist_id}.")
        if file.get("truncated"):
            raise TransportError(f"Gist: File '{self.file_name}' is truncated.")

        try:
            last_updated = parse_timestamp(data["updated_at"])
        except (KeyError, TypeError, ValueError):
            raise TransportError("Gist: Response has no valid updated_at timestamp.")

        return RemoteReport(report=file["content"], last_updated=last_updated)

    def put(self, report: str) -> None:
        """Replace the remote report content."""
        try:
            r = requests.patch(
                self.url,
                headers=self._headers(),
                json={"files": {self.file_name: {"content": report}}},
                timeout=10,
            )
        except requests.exceptions.ConnectionError:
            raise TransportError(f"Gist: Cannot connect to {self.base_url}. Check your network!")
        except requests.exceptions.Timeout:
            raise TransportError("Gist: Connection timed out. The server may be slow.")

        if not r.ok:
            raise TransportError(_handle_api_error(r, "Gist"), r.status_code)
