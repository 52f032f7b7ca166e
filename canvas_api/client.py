"""
HTTP client for the Canvas LMS REST API.

Wraps an ``httpx.Client`` carrying the bearer token and follows the
``Link: <...>; rel="next"`` header Canvas uses for pagination. Every
failure (non-200 status, transport error, unexpected payload) surfaces as
``CanvasApiError`` so callers can isolate it per course.
"""
from __future__ import annotations

import logging
import re
import typing as t

import httpx
from pydantic import ValidationError

from canvas_api.models import CanvasAssignment, CanvasCourse

logger = logging.getLogger(__name__)

# Timeout settings for Canvas requests (in seconds)
STANDARD_TIMEOUT = 30.0

COURSES_PAGE_SIZE = 50
ASSIGNMENTS_PAGE_SIZE = 100

_LINK_RE = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


class CanvasApiError(RuntimeError):
    """Raised when a Canvas request fails or returns something unusable."""


def normalize_base_url(base_url: str) -> str:
    """Strip trailing slashes so paths can be appended with a single '/'."""
    return base_url.rstrip("/")


def parse_link_header(link_header: str) -> dict[str, str]:
    """Parse an RFC 5988 ``Link`` header into a ``{rel: url}`` mapping.

    Example::

        <https://x/api/v1/courses?page=2>; rel="next", <https://x/...>; rel="last"

    :param link_header: Raw header value.
    :return: Mapping of relation name to URL. Unparseable parts are skipped.
    """
    links: dict[str, str] = {}
    for part in link_header.split(","):
        match = _LINK_RE.search(part)
        if match:
            links[match.group(2)] = match.group(1)
    return links


class CanvasClient:
    """Thin Canvas API client.

    Args:
        base_url: Canvas instance URL, e.g. ``https://school.instructure.com``.
        token: Personal access token sent as ``Authorization: Bearer``.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = STANDARD_TIMEOUT,
        transport: t.Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"Authorization": f"Bearer {token}"},
        )

    def __enter__(self) -> "CanvasClient":
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, url: str) -> httpx.Response:
        logger.debug("GET %s", url)
        try:
            return self._client.get(url)
        except httpx.TimeoutException:
            raise CanvasApiError(f"Canvas request timed out after {self.timeout} seconds")
        except httpx.HTTPError as e:
            raise CanvasApiError(f"Error calling Canvas: {e}") from e

    @staticmethod
    def _rows(response: httpx.Response) -> list[dict[str, t.Any]]:
        try:
            data = response.json()
        except ValueError as e:
            raise CanvasApiError(f"Invalid JSON from Canvas: {e}") from e
        if not isinstance(data, list):
            raise CanvasApiError(f"Expected a list from Canvas, got {type(data).__name__}")
        return data

    def fetch_active_courses(self) -> list[CanvasCourse]:
        """List courses with an active enrollment (first page only)."""
        url = f"{self.base_url}/api/v1/courses?enrollment_state=active&per_page={COURSES_PAGE_SIZE}"
        response = self._get(url)
        if response.status_code != 200:
            raise CanvasApiError(f"Failed to fetch courses: {response.status_code}")

        try:
            return [CanvasCourse.model_validate(row) for row in self._rows(response)]
        except ValidationError as e:
            raise CanvasApiError(f"Unexpected course payload from Canvas: {e}") from e

    def fetch_assignments(self, course_id: t.Union[str, int]) -> list[CanvasAssignment]:
        """Fetch every assignment of a course, following pagination.

        :param course_id: Canvas course id.
        :return: Assignments from all pages, in server order.
        :raises CanvasApiError: On the first failing page; nothing partial is returned.
        """
        url: t.Optional[str] = (
            f"{self.base_url}/api/v1/courses/{course_id}/assignments"
            f"?order_by=due_at&per_page={ASSIGNMENTS_PAGE_SIZE}"
        )
        assignments: list[CanvasAssignment] = []

        while url:
            response = self._get(url)
            if response.status_code != 200:
                raise CanvasApiError(
                    f"Failed to fetch assignments for course {course_id}: {response.status_code}"
                )

            try:
                assignments.extend(CanvasAssignment.model_validate(row) for row in self._rows(response))
            except ValidationError as e:
                raise CanvasApiError(f"Unexpected assignment payload from Canvas: {e}") from e

            # httpx headers are case-insensitive, so "Link" and "link" both match
            link_header = response.headers.get("link")
            url = parse_link_header(link_header).get("next") if link_header else None

        logger.debug("Fetched %d assignments for course %s", len(assignments), course_id)
        return assignments
