from __future__ import annotations

import logging

import httpx

from timetable.core.config import Settings, get_settings
from timetable.core.exceptions import ConfigurationError, SlotStorageError
from timetable.services.slot_model import ScheduleSlot

logger = logging.getLogger(__name__)

SLOTS_PATH = "/schedule-slots/"
CURRENT_YEAR_PATH = "/academic-years/current/"


def build_http_client(settings: Settings | None = None) -> httpx.Client:
    settings = settings or get_settings()
    if not settings.slot_api_base_url:
        raise ConfigurationError("slot_api_base_url must be configured to reach the slot-storage service")
    return httpx.Client(
        base_url=settings.slot_api_base_url,
        timeout=settings.http_timeout_seconds,
        headers={"Accept": "application/json"},
    )


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message")
        if detail:
            return str(detail)
    return str(body)


def unwrap_records(data: object) -> list[dict]:
    """Accept either a bare list or a paginated ``{"results": [...]}`` envelope."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        results = data.get("results")
        if isinstance(results, list):
            return results
    return []


class _ApiClient:
    def __init__(self, client: httpx.Client):
        self._client = client

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise SlotStorageError(f"{method} {url} failed: {exc}") from exc
        if response.is_error:
            detail = _error_detail(response)
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, detail)
            raise SlotStorageError(
                f"{method} {url} returned {response.status_code}: {detail}",
                status_code=response.status_code,
                details={"detail": detail},
            )
        return response

    def _json(self, response: httpx.Response) -> object:
        """Decoded body, or ``None`` when the service answered without one."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            request = response.request
            logger.warning("%s %s returned a body that is not JSON", request.method, request.url)
            raise SlotStorageError(
                f"{request.method} {request.url} returned a body that is not JSON",
                status_code=response.status_code,
            ) from exc


class SlotStorageClient(_ApiClient):
    """Client for the REST slot-storage service."""

    def list_slots(self, group_id: int) -> list[dict]:
        response = self._request("GET", SLOTS_PATH, params={"subject_group": group_id})
        return unwrap_records(self._json(response))

    def create_slot(self, group_id: int, slot: ScheduleSlot) -> dict | None:
        payload = {"subject_group": group_id, **slot.to_payload()}
        return self._json(self._request("POST", SLOTS_PATH, json=payload))

    def update_slot(self, slot_id: int, slot: ScheduleSlot) -> dict | None:
        # Explicit nulls so clearing a room or quarter reaches the server.
        payload = slot.to_payload(explicit_nulls=True)
        return self._json(self._request("PATCH", f"{SLOTS_PATH}{slot_id}/", json=payload))

    def delete_slot(self, slot_id: int) -> None:
        self._request("DELETE", f"{SLOTS_PATH}{slot_id}/")


class AcademicYearClient(_ApiClient):
    def get_current_year(self) -> dict | None:
        """The active academic year, or ``None`` when none is configured."""
        try:
            response = self._request("GET", CURRENT_YEAR_PATH)
        except SlotStorageError as exc:
            if exc.remote_status_code == 404:
                return None
            raise
        data = self._json(response)
        return data if isinstance(data, dict) and data else None
