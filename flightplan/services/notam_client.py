"""ICAO API Data Service NOTAM client.

Fetches the NOTAMs currently in force for a list of locations and turns
them into ``Notam`` value objects, classified from their Q-code.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

import httpx

from flightplan.contracts.enums import NotamCategory, NotamType, Priority
from flightplan.contracts.notam import Notam, NotamClassification

logger = logging.getLogger(__name__)

ICAO_BASE_URL = "https://applications.icao.int/dataservices/api"

# Second and third Q-code letters (subject) -> NotamType
_SUBJECT_TYPES = {
    "MR": NotamType.RUNWAY,
    "MX": NotamType.TAXIWAY,
    "MN": NotamType.TAXIWAY,
}
_SUBJECT_FAMILIES = {
    "I": NotamType.APPROACH,
    "P": NotamType.APPROACH,
    "S": NotamType.TOWER,
    "O": NotamType.OBSTACLE,
    "R": NotamType.AIRSPACE,
    "A": NotamType.AIRSPACE,
    "L": NotamType.LIGHTING,
    "N": NotamType.NAVAID,
}

# Fourth and fifth Q-code letters (condition) -> NotamCategory
_CONDITION_CATEGORIES = {
    "LC": NotamCategory.CLOSURE,
    "AU": NotamCategory.CLOSURE,
    "LT": NotamCategory.RESTRICTION,
    "AH": NotamCategory.RESTRICTION,
    "AR": NotamCategory.RESTRICTION,
    "CA": NotamCategory.RESTRICTION,
    "CH": NotamCategory.CHANGE,
    "CS": NotamCategory.CHANGE,
    "CM": NotamCategory.CHANGE,
}

_IMPACT = {
    Priority.CRITICAL: "critical",
    Priority.HIGH: "high",
    Priority.MEDIUM: "medium",
    Priority.LOW: "low",
}


class NotamProvider(Protocol):
    async def fetch_current(self, airports: list[str]) -> list[Notam]: ...


class IcaoNotamClient:
    """Async client for the ICAO ``notams-realtime-list`` endpoint."""

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        *,
        base_url: str = ICAO_BASE_URL,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise ValueError("An ICAO API key is required")
        self._api_key = api_key
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._base_url = base_url.rstrip("/")

    async def fetch_current(self, airports: list[str]) -> list[Notam]:
        if not airports:
            return []
        resp = await self._client.get(
            f"{self._base_url}/notams-realtime-list",
            params={
                "api_key": self._api_key,
                "format": "json",
                "criticality": "",
                "locations": ",".join(a.upper() for a in airports),
            },
        )
        resp.raise_for_status()
        data = resp.json() or []
        notams = [_parse_notam(entry) for entry in data if entry.get("location")]
        logger.info("Fetched %d NOTAMs for %s", len(notams), ",".join(airports))
        return notams

    async def aclose(self) -> None:
        await self._client.aclose()


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def classify(q_code: str | None) -> tuple[NotamType, NotamClassification]:
    """Derive type, severity and category from a five-letter Q-code (e.g. ``QMRLC``)."""
    code = (q_code or "").upper()
    if code.startswith("Q"):
        code = code[1:]
    subject, condition = code[:2], code[2:4]

    notam_type = _SUBJECT_TYPES.get(subject)
    if notam_type is None:
        notam_type = _SUBJECT_FAMILIES.get(subject[:1], NotamType.GENERAL)
    category = _CONDITION_CATEGORIES.get(condition, NotamCategory.INFORMATION)

    if category == NotamCategory.CLOSURE:
        severity = Priority.CRITICAL if notam_type == NotamType.RUNWAY else Priority.HIGH
    elif category == NotamCategory.RESTRICTION:
        severity = Priority.MEDIUM
    else:
        severity = Priority.LOW

    return notam_type, NotamClassification(
        severity=severity, category=category, impact_level=_IMPACT[severity]
    )


def _parse_notam(data: dict) -> Notam:
    """Parse one ICAO API entry into a Notam."""
    notam_type, classification = classify(data.get("Qcode"))
    return Notam(
        number=data.get("id") or data.get("key") or "UNKNOWN",
        airport=data["location"],
        type=notam_type,
        raw=data.get("all", ""),
        subject=data.get("Subject"),
        condition=data.get("Condition") or data.get("Modifier"),
        effective_from=_parse_date(data.get("startdate")) or datetime.now(tz=timezone.utc),
        effective_to=_parse_date(data.get("enddate")),
        classification=classification,
    )
