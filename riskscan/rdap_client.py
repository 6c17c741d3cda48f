"""Domain registration age via RDAP."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import requests

from .config import DEFAULT_USER_AGENT
from .errors import CollaboratorTimeout
from .log_utils import log_debug


@dataclass
class RdapClient:
    base_url: str = "https://rdap.org/domain/"
    timeout_seconds: float = 5.0
    user_agent: str = DEFAULT_USER_AGENT
    debug: bool = False

    def domain_age_days(self, domain: str) -> int | None:
        """Days since registration, or None when the registry does not say."""
        if not domain:
            return None
        url = f"{self.base_url.rstrip('/')}/{domain}"
        headers = {
            "Accept": "application/rdap+json, application/json",
            "User-Agent": self.user_agent,
        }
        log_debug(self.debug, f"RDAP request domain={domain}")
        try:
            response = requests.get(url, headers=headers, timeout=self.timeout_seconds)
        except requests.Timeout as exc:
            raise CollaboratorTimeout("domain age lookup", self.timeout_seconds) from exc

        if response.status_code == 404:
            log_debug(self.debug, f"RDAP not found domain={domain}")
            return None
        response.raise_for_status()
        log_debug(self.debug, f"RDAP ok domain={domain} status={response.status_code}")
        return registration_age_days(response.json())


def registration_age_days(payload: dict[str, Any], now: datetime | None = None) -> int | None:
    created = _registration_date(payload)
    if created is None:
        return None
    now = now or datetime.now(timezone.utc)
    days = (now - created).days
    return days if days >= 0 else None


def _registration_date(payload: dict[str, Any]) -> datetime | None:
    for event in payload.get("events") or []:
        action = str(event.get("eventAction") or "").lower()
        if "registration" not in action:
            continue
        raw = event.get("eventDate")
        if not raw:
            return None
        try:
            created = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
        except ValueError:
            return None
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return created
    return None
