"""
Client for the remote pattern registry.

The registry answers ``GET /api/patterns`` with a JSON object mapping
pattern keys to pattern specs. A failed fetch is not an error for the
caller: it yields an empty map plus a notice for the editing surface.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from validation_builder.config.settings import get_settings
from validation_builder.schema.model import PatternsMap

logger = logging.getLogger(__name__)

FETCH_FAILED_NOTICE = "Failed to load patterns from backend"


@dataclass
class PatternFetchResult:
    """Outcome of a registry fetch."""
    patterns: PatternsMap = field(default_factory=dict)
    notice: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.notice is None


class PatternRegistryClient:
    """Fetches the pattern map from the registry service. No retries."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        path: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            base_url: Registry base URL (defaults to settings)
            path: Patterns endpoint path (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            transport: Optional httpx transport, used by tests
        """
        settings = get_settings()
        self.base_url = base_url or settings.pattern_registry_url
        self.path = path or settings.pattern_registry_path
        self.timeout = timeout if timeout is not None else settings.pattern_registry_timeout
        self.transport = transport

    @property
    def url(self) -> str:
        return self.base_url.rstrip("/") + "/" + self.path.lstrip("/")

    def fetch(self) -> PatternFetchResult:
        """
        Fetch the pattern map.

        Returns:
            PatternFetchResult; on failure the map is empty and a notice is set
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(self.url)
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Pattern registry fetch from {self.url} failed: {e}")
            return PatternFetchResult(notice=FETCH_FAILED_NOTICE)

        if not isinstance(body, dict):
            logger.error(
                f"Pattern registry returned {type(body).__name__}, expected an object")
            return PatternFetchResult(notice=FETCH_FAILED_NOTICE)

        return PatternFetchResult(patterns=self._clean(body))

    @staticmethod
    def _clean(body: dict) -> PatternsMap:
        patterns: PatternsMap = {}
        for key, value in body.items():
            if isinstance(value, str):
                patterns[key] = value
            else:
                logger.warning(f"Dropping pattern {key}: spec is not a string")
        logger.info(f"Loaded {len(patterns)} patterns from registry")
        return patterns
