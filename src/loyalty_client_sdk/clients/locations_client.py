from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .. import endpoints
from ..envelope import extract_list
from ..exceptions import ValidationError
from ..models_locations import City, District, Location, Region
from .base import BaseClient

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2
SEARCH_CACHE_SECONDS = 5 * 60
SEARCH_CACHE_MAX_ENTRIES = 100
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_LANGUAGE = "ar"


def format_location_display(location: Location | Mapping[str, Any] | None, language: str = DEFAULT_LANGUAGE) -> str:
    if location is None:
        return ""
    model = location if isinstance(location, Location) else Location.model_validate(location)
    if model.hierarchy:
        return model.hierarchy
    name = model.name_ar if language == "ar" else model.name_en
    return name or model.display_text or ""


@dataclass
class LocationsClient(BaseClient):
    """Saudi region/city/district lookups.

    Searches are cached per ``query-lang-limit`` key. The whole search cache is
    dropped once it is older than five minutes or holds more than 100 entries.
    Regions are cached for the lifetime of the client.
    """

    clock: Callable[[], float] = time.monotonic
    _searches: dict[str, list[Location]] = field(default_factory=dict, repr=False)
    _searches_cleared_at: float | None = field(default=None, repr=False)
    _regions: dict[str, list[Region]] = field(default_factory=dict, repr=False)

    def _expire_searches(self) -> None:
        now = self.clock()
        if self._searches_cleared_at is None:
            self._searches_cleared_at = now
        if now - self._searches_cleared_at > SEARCH_CACHE_SECONDS:
            self._searches.clear()
            self._searches_cleared_at = now
        if len(self._searches) > SEARCH_CACHE_MAX_ENTRIES:
            self._searches.clear()

    def search(self, query: str, *, language: str = DEFAULT_LANGUAGE, limit: int = DEFAULT_SEARCH_LIMIT) -> list[Location]:
        if not query or len(query) < MIN_SEARCH_LENGTH:
            return []
        key = f"{query}-{language}-{limit}"
        self._expire_searches()
        if key in self._searches:
            return self._searches[key]
        data = self._data(
            "GET",
            endpoints.LOCATION_SEARCH,
            params={"q": query, "lang": language, "limit": limit},
            use_get_cache=False,
            module="locations",
            operation="search",
        )
        found = [Location.model_validate(row) for row in extract_list(data, "results")]
        self._searches[key] = found
        return found

    def regions(self, *, language: str = DEFAULT_LANGUAGE) -> list[Region]:
        if language in self._regions:
            return self._regions[language]
        data = self._data(
            "GET",
            endpoints.LOCATION_REGIONS,
            params={"lang": language},
            module="locations",
            operation="regions",
        )
        loaded = [Region.model_validate(row) for row in extract_list(data, "regions")]
        self._regions[language] = loaded
        return loaded

    def cities(self, region_id: str | int, *, language: str = DEFAULT_LANGUAGE) -> list[City]:
        data = self._data(
            "GET",
            endpoints.resource(endpoints.LOCATION_REGIONS, region_id, "cities"),
            params={"lang": language},
            module="locations",
            operation="cities",
        )
        return [City.model_validate(row) for row in extract_list(data, "cities")]

    def districts(self, city_id: str | int, *, language: str = DEFAULT_LANGUAGE) -> list[District]:
        data = self._data(
            "GET",
            endpoints.resource(endpoints.LOCATIONS, "cities", city_id, "districts"),
            params={"lang": language},
            module="locations",
            operation="districts",
        )
        return [District.model_validate(row) for row in extract_list(data, "districts")]

    def get(self, location_type: str, location_id: str | int, *, language: str = DEFAULT_LANGUAGE) -> Location:
        data = self._data(
            "GET",
            endpoints.resource(endpoints.LOCATIONS, location_type, location_id),
            params={"lang": language},
            module="locations",
            operation="get",
        )
        if not isinstance(data, dict):
            raise ValueError("Expected location response to be a JSON object")
        return Location.model_validate(data)

    def validate(self, location: Mapping[str, Any], *, language: str = DEFAULT_LANGUAGE) -> dict[str, Any]:
        """Return ``{valid, hierarchy, ...}``; a rejected location comes back with ``valid`` false."""
        try:
            data = self._data(
                "POST",
                endpoints.LOCATION_VALIDATE,
                params={"lang": language},
                json_body=dict(location),
                module="locations",
                operation="validate",
            )
        except ValidationError as exc:
            logger.info("location_validate_rejected", extra={"code": exc.code})
            return {"valid": False, "message": exc.message}
        return data if isinstance(data, dict) else {"valid": bool(data)}

    def clear_cache(self) -> None:
        self._searches.clear()
        self._searches_cleared_at = None
        self._regions.clear()
