"""HTTP client for the data.police.uk API with per-call deadlines."""

import logging
import re
from typing import Any

import httpx

from stopsearch.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")


class PoliceAPIError(Exception):
    """Base exception for data.police.uk failures."""

    pass


class NoDataAvailable(PoliceAPIError):
    """No published months match the requested force."""

    pass


class UpstreamRateLimited(PoliceAPIError):
    """The API answered 429; callers should retry later."""

    pass


class UpstreamTimeout(PoliceAPIError):
    """A request did not complete within its deadline."""

    pass


class UpstreamError(PoliceAPIError):
    """Any other non-2xx status, transport failure or malformed body."""

    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


def validate_month(month: str) -> bool:
    """Check a YYYY-MM month string."""
    return bool(MONTH_PATTERN.match(month))


def validate_force(force: str) -> bool:
    return 0 < len(force) <= 50


class PoliceAPIClient:
    """
    Client for the UK Police data API.

    Features:
    - Explicit per-call timeout; the underlying connection pool is scoped to
      the call and closed on success, error and timeout alike
    - 429 surfaced as UpstreamRateLimited so the UI can suggest retrying later
    - No retry: throttling is owned by the collector and never adapts
    """

    def __init__(
        self,
        base_url: str = settings.police_api_base_url,
        timeout: float = settings.request_timeout_seconds,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.headers: dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
        not_found_ok: bool = False,
    ) -> list[Any]:
        """Make a single GET request and return the decoded JSON list."""
        deadline = self.timeout if timeout is None else timeout

        try:
            async with httpx.AsyncClient(timeout=deadline) as client:
                response = await client.get(url, headers=self.headers, params=params)
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body = e.response.text
            logger.warning(f"Police API error: {status}, body: {body[:200]}")
            if status == 404 and not_found_ok:
                return []
            if status == 429:
                raise UpstreamRateLimited("Rate limit exceeded. Please try again later") from e
            raise UpstreamError(
                f"Police API error: {status}", status_code=status, detail=body
            ) from e

        except httpx.TimeoutException as e:
            raise UpstreamTimeout(f"Request timed out after {deadline}s") from e

        except httpx.RequestError as e:
            raise UpstreamError(f"Request error: {e}") from e

        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from Police API: {e}") from e

        if not isinstance(data, list):
            raise UpstreamError(
                f"Police API returned invalid data format: expected array, got {type(data).__name__}"
            )

        return data

    async def fetch_available_dates(self, timeout: float | None = None) -> list[Any]:
        """
        Fetch the months for which street-level data has been published.

        Returns:
            Raw entries of the form {"date": "YYYY-MM", "<category>": [force, ...]}
        """
        url = f"{self.base_url}/crimes-street-dates"

        logger.info("Fetching available dates")
        entries = await self._request(url, timeout=timeout)
        logger.info(f"Fetched {len(entries)} available date entries")

        return entries

    async def fetch_stop_searches(
        self,
        month: str,
        force: str = settings.force,
        timeout: float | None = None,
    ) -> list[Any]:
        """
        Fetch raw stop and search records for one force and month.

        Args:
            month: Month in YYYY-MM format
            force: Force identifier, e.g. "metropolitan"
            timeout: Deadline for this call, defaults to the client timeout

        Returns:
            Raw records; empty when the API has no data for the month (404)
        """
        if not validate_month(month):
            raise ValueError(f"Invalid date format {month!r}. Expected YYYY-MM format")
        if not validate_force(force):
            raise ValueError(f"Invalid force parameter {force!r}")

        url = f"{self.base_url}/stops-force"
        params = {"date": month, "force": force}

        logger.info(f"Fetching stop and search records: date={month}, force={force}")
        records = await self._request(url, params=params, timeout=timeout, not_found_ok=True)
        logger.info(f"Fetched {len(records)} records for {month}")

        return records
