from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from loyalty_client_sdk import ApiSession
from loyalty_client_sdk.branch_rules import LOCATION_DELIMITER
from loyalty_client_sdk.models_locations import City, District, Location, Region

from .errors import normalize_error

logger = logging.getLogger(__name__)


@dataclass
class LocationPickerState:
    region: Region | None = None
    city: City | None = None
    district: District | None = None
    cities: list[City] = field(default_factory=list)
    districts: list[District] = field(default_factory=list)
    show_district_dropdown: bool = False


class LocationSelector:
    """Cascading region, city and district pickers backed by the locations API."""

    def __init__(self, session: ApiSession, *, language: str = "ar") -> None:
        self.session = session
        self.language = language
        self.state = LocationPickerState()

    def regions(self) -> list[Region]:
        try:
            return self.session.locations_client().regions(language=self.language)
        except Exception as exc:
            raise normalize_error(exc) from exc

    def search(self, query: str) -> list[Location]:
        try:
            return self.session.locations_client().search(query, language=self.language)
        except Exception as exc:
            raise normalize_error(exc) from exc

    def select_region(self, region: Region) -> list[City]:
        try:
            cities = self.session.locations_client().cities(region.id or "", language=self.language)
        except Exception as exc:
            raise normalize_error(exc) from exc
        self.state = LocationPickerState(region=region, cities=cities)
        return cities

    def select_city(self, city: City) -> LocationPickerState:
        try:
            districts = self.session.locations_client().districts(city.id or "", language=self.language)
        except Exception as exc:
            raise normalize_error(exc) from exc
        state = self.state
        state.city = city
        state.districts = districts
        if len(districts) == 1:
            state.district = districts[0]
            state.show_district_dropdown = False
        elif not districts:
            # cities without districts use the city itself as the district
            state.district = District(
                id=city.id,
                name_ar=city.name_ar,
                name_en=city.name_en,
                region_id=city.region_id,
                city_id=city.id,
            )
            state.show_district_dropdown = False
        else:
            state.district = None
            state.show_district_dropdown = True
        logger.debug("location_city_selected", extra={"districts": len(districts)})
        return state

    def select_district(self, district: District) -> None:
        self.state.district = district

    def _name(self, location: Location | None) -> str:
        return location.display_name(self.language) if location is not None else ""

    def selection_payload(self) -> dict[str, Any]:
        state = self.state
        region = self._name(state.region)
        city = self._name(state.city)
        district = self._name(state.district)
        parts = [part for part in (region, city, district) if part]
        deepest = state.district or state.city or state.region
        location_data = None
        if deepest is not None:
            hierarchy = LOCATION_DELIMITER.join(parts)
            location_data = {
                "id": deepest.id,
                "type": deepest.type,
                "name_ar": deepest.name_ar,
                "name_en": deepest.name_en,
                "hierarchy": hierarchy,
                "displayText": hierarchy,
                "region": region,
                "city": city,
                "district": district,
            }
        return {"region": region, "city": city, "district": district, "location_data": location_data}
