"""Player UUID to username lookups, used only for report display."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Protocol

import requests

from mc_inspector.errors import UsernameLookupError

PROFILE_LOOKUP_URL = "https://api.minecraftservices.com/minecraft/profile/lookup/{uuid}"


class UsernameLookup(Protocol):
    def lookup(self, uuid: str) -> str:
        """Return the current username for ``uuid`` or raise UsernameLookupError."""


class DisabledUsernameLookup:
    """Used when lookups are switched off; reports always show the placeholder."""

    def lookup(self, uuid: str) -> str:
        raise UsernameLookupError("username lookup is disabled")


class MojangUsernameLookup:
    """Queries the Mojang profile API.

    Successful answers are cached for the lifetime of the process, keyed by the
    dash-less UUID. Outbound calls are spaced at least ``min_interval_seconds``
    apart to avoid HTTP 429 responses.
    """

    def __init__(
        self,
        *,
        url_template: str = PROFILE_LOOKUP_URL,
        timeout_seconds: float = 3.0,
        min_interval_seconds: float = 1.0,
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        self._url_template = url_template
        self._timeout_seconds = timeout_seconds
        self._min_interval_seconds = min_interval_seconds
        self._session = session or requests.Session()
        self._clock = clock
        self._sleep = sleep
        self._logger = logger or logging.getLogger("mc_inspector.username_lookup")

        self._cache: dict[str, str] = {}
        self._cache_lock = threading.Lock()
        self._request_lock = threading.Lock()
        self._last_request_at: float | None = None

    def lookup(self, uuid: str) -> str:
        key = uuid.replace("-", "").lower()
        with self._cache_lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        name = self._fetch(key)
        with self._cache_lock:
            self._cache[key] = name
        return name

    def _fetch(self, key: str) -> str:
        url = self._url_template.format(uuid=key)
        with self._request_lock:
            self._wait_for_slot()
            try:
                response = self._session.get(url, timeout=self._timeout_seconds)
            except requests.RequestException as exc:
                self._logger.warning("username_lookup_failed", extra={"uuid": key, "error": str(exc)})
                raise UsernameLookupError(f"HTTP request failed: {exc}") from exc
            finally:
                self._last_request_at = self._clock()

        if response.status_code != 200:
            self._logger.warning("username_lookup_rejected", extra={"uuid": key, "status": response.status_code})
            raise UsernameLookupError(f"failed to fetch username for {key}: HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise UsernameLookupError(f"failed to parse profile response: {exc}") from exc

        name = payload.get("name") if isinstance(payload, dict) else None
        if not isinstance(name, str) or not name:
            raise UsernameLookupError(f"profile response for {key} has no name")

        self._logger.info("username_lookup_succeeded", extra={"uuid": key, "username": name})
        return name

    def _wait_for_slot(self) -> None:
        if self._last_request_at is None:
            return
        remaining = self._last_request_at + self._min_interval_seconds - self._clock()
        if remaining > 0:
            self._sleep(remaining)


def display_name(lookup: UsernameLookup | None, uuid: str, placeholder: str = "???") -> str:
    if lookup is None:
        return placeholder
    try:
        return lookup.lookup(uuid)
    except UsernameLookupError:
        return placeholder
