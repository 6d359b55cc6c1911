"""Transport layer for the Slides and Drive APIs.

Defines the Transport protocol and implementations:
- GoogleSlidesTransport: Production transport using Google Slides and Drive APIs
- LocalFileTransport: Test transport reading from local golden files
"""

from __future__ import annotations

import json
import logging
import ssl
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import certifi
import httpx

from slidemanager.exceptions import (
    APIError,
    AuthenticationError,
    ExportError,
    NotFoundError,
    RejectedError,
    TransportError,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# API constants
SLIDES_API_BASE = "https://slides.googleapis.com/v1/presentations"
DRIVE_API_BASE = "https://www.googleapis.com/drive/v3/files"
DEFAULT_TIMEOUT = 60

# Statuses for which batchUpdate is known to have applied nothing
_REJECTED_STATUSES = frozenset({400, 409, 422})


@dataclass(frozen=True)
class PresentationData:
    """Point-in-time snapshot of a presentation.

    Attributes:
        presentation_id: The presentation identifier
        data: Full API response (presentation JSON)
    """

    presentation_id: str
    data: dict[str, Any]

    @property
    def title(self) -> str:
        return str(self.data.get("title", ""))

    @property
    def slides(self) -> list[dict[str, Any]]:
        slides: list[dict[str, Any]] = self.data.get("slides", [])
        return slides


class Transport(ABC):
    """Abstract base class for presentation data transport.

    Implementations must provide methods to fetch presentation data,
    send batch updates, create presentations and export them.
    """

    @abstractmethod
    async def get_presentation(self, presentation_id: str) -> PresentationData:
        """Fetch a complete presentation snapshot.

        Args:
            presentation_id: The presentation identifier

        Returns:
            PresentationData with full presentation contents
        """
        ...

    @abstractmethod
    async def batch_update(
        self, presentation_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Send batch update requests to the presentation.

        The service applies the requests in order and all-or-nothing.

        Args:
            presentation_id: The presentation identifier
            requests: List of Google Slides API request objects

        Returns:
            API response from batchUpdate
        """
        ...

    @abstractmethod
    async def create_presentation(self, title: str) -> dict[str, Any]:
        """Create an empty presentation and return the API response."""
        ...

    @abstractmethod
    async def move_to_folder(self, file_id: str, folder_id: str) -> None:
        """Add a Drive folder as parent of the given file."""
        ...

    @abstractmethod
    async def export_file(self, file_id: str, mime_type: str) -> bytes:
        """Export a file through Drive and return the raw bytes."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        ...


class GoogleSlidesTransport(Transport):
    """Production transport talking to the Slides and Drive APIs.

    Handles authentication headers, SSL, and HTTP communication.
    """

    def __init__(
        self,
        access_token: str,
        timeout: int = DEFAULT_TIMEOUT,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            access_token: OAuth2 access token with presentations and drive scopes
            timeout: Request timeout in seconds
            http_transport: Optional httpx transport (used by tests)
        """
        self._access_token = access_token
        self._timeout = timeout
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        self._client = httpx.AsyncClient(
            timeout=timeout,
            verify=ssl_context,
            transport=http_transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
        )

    async def get_presentation(self, presentation_id: str) -> PresentationData:
        """Fetch presentation data from Google Slides API."""
        url = f"{SLIDES_API_BASE}/{presentation_id}"
        logger.debug("Fetching presentation %s", presentation_id)
        response = await self._send("GET", url)
        result: dict[str, Any] = response.json()

        return PresentationData(
            presentation_id=result.get("presentationId", presentation_id),
            data=result,
        )

    async def batch_update(
        self, presentation_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Send batch update requests to Google Slides API."""
        url = f"{SLIDES_API_BASE}/{presentation_id}:batchUpdate"
        logger.debug(
            "Submitting %d request(s) to presentation %s",
            len(requests),
            presentation_id,
        )
        response = await self._send(
            "POST", url, json={"requests": requests}, batch=True
        )
        result: dict[str, Any] = response.json()
        return result

    async def create_presentation(self, title: str) -> dict[str, Any]:
        """Create a new presentation via the Slides API."""
        response = await self._send("POST", SLIDES_API_BASE, json={"title": title})
        result: dict[str, Any] = response.json()
        return result

    async def move_to_folder(self, file_id: str, folder_id: str) -> None:
        """Add a parent folder to a file via the Drive API."""
        url = f"{DRIVE_API_BASE}/{file_id}"
        await self._send("PATCH", url, json={}, params={"addParents": folder_id})

    async def export_file(self, file_id: str, mime_type: str) -> bytes:
        """Download an export of the file via the Drive API."""
        url = f"{DRIVE_API_BASE}/{file_id}/export"
        logger.debug("Exporting %s as %s", file_id, mime_type)
        try:
            response = await self._send("GET", url, params={"mimeType": mime_type})
        except APIError as e:
            raise ExportError(
                f"Export as {mime_type} failed ({e.status_code}): {e.message}"
            ) from e
        return response.content

    async def _send(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        batch: bool = False,
    ) -> httpx.Response:
        """Make an authenticated request and map HTTP errors."""
        try:
            response = await self._client.request(method, url, json=json, params=params)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise self._handle_http_error(e, batch=batch) from e
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e

    def _handle_http_error(
        self, e: httpx.HTTPStatusError, *, batch: bool = False
    ) -> TransportError:
        """Convert HTTP errors to appropriate transport exceptions."""
        status = e.response.status_code
        if status == 401:
            return AuthenticationError("Invalid or expired access token")
        if status == 403:
            return AuthenticationError(
                "Access denied. Check your scopes and permissions."
            )
        if status == 404:
            return NotFoundError(
                "Presentation not found. Check the ID and sharing permissions."
            )
        message = _error_message(e.response)
        if batch and status in _REJECTED_STATUSES:
            return RejectedError(
                f"Batch rejected, no changes applied ({status}): {message}",
                status_code=status,
            )
        return APIError(f"API error ({status}): {message}", status_code=status)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a Google API error body."""
    body = response.text
    try:
        message = response.json().get("error", {}).get("message")
    except (json.JSONDecodeError, AttributeError, ValueError):
        return body
    return str(message) if message else body


class LocalFileTransport(Transport):
    """Test transport that reads from local golden files.

    Expected directory structure:
        golden_dir/
            <presentation_id>/
                presentation.json
    """

    def __init__(self, golden_dir: Path) -> None:
        """Initialize the transport.

        Args:
            golden_dir: Directory containing golden test files
        """
        self._golden_dir = golden_dir
        self._batch_updates: list[dict[str, Any]] = []
        self._created: list[dict[str, Any]] = []
        self._moves: list[tuple[str, str]] = []
        self._exports: list[tuple[str, str]] = []

    async def get_presentation(self, presentation_id: str) -> PresentationData:
        """Read presentation from local file."""
        path = self._golden_dir / presentation_id / "presentation.json"
        if not path.exists():
            raise NotFoundError(f"Golden file not found: {path}")

        response = json.loads(path.read_text(encoding="utf-8"))

        return PresentationData(
            presentation_id=response.get("presentationId", presentation_id),
            data=response,
        )

    async def batch_update(
        self, presentation_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Record batch update requests (for testing)."""
        self._batch_updates.append(
            {"presentation_id": presentation_id, "requests": requests}
        )
        return {"presentationId": presentation_id, "replies": [{}] * len(requests)}

    async def create_presentation(self, title: str) -> dict[str, Any]:
        """Record a created presentation and return a mock response."""
        presentation = {
            "presentationId": f"local_{len(self._created) + 1}",
            "title": title,
            "slides": [],
        }
        self._created.append(presentation)
        return presentation

    async def move_to_folder(self, file_id: str, folder_id: str) -> None:
        """Record a folder move."""
        self._moves.append((file_id, folder_id))

    async def export_file(self, file_id: str, mime_type: str) -> bytes:
        """Return the golden export file for the mime type, if any."""
        self._exports.append((file_id, mime_type))
        presentation_dir = self._golden_dir / file_id
        if not presentation_dir.exists():
            raise NotFoundError(f"Golden file not found: {presentation_dir}")
        path = presentation_dir / "exports" / mime_type.replace("/", "_")
        if path.exists():
            return path.read_bytes()
        return f"{mime_type}:{file_id}".encode()

    async def close(self) -> None:
        """No-op for local file transport."""
        pass

    @property
    def batch_updates(self) -> list[dict[str, Any]]:
        """Get recorded batch updates (for test assertions)."""
        return self._batch_updates

    @property
    def created(self) -> list[dict[str, Any]]:
        return self._created

    @property
    def moves(self) -> list[tuple[str, str]]:
        return self._moves

    @property
    def exports(self) -> list[tuple[str, str]]:
        return self._exports
