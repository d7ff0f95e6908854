from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Location(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # deepest identifier wins: a district row also carries city_id and region_id
    id: str | int | None = Field(
        default=None,
        validation_alias=AliasChoices("id", "district_id", "city_id", "region_id"),
    )
    type: str | None = None
    name_ar: str | None = None
    name_en: str | None = None
    hierarchy: str | None = None
    display_text: str | None = Field(default=None, validation_alias=AliasChoices("displayText", "display_text"))
    region_id: str | int | None = None
    city_id: str | int | None = None

    def display_name(self, language: str = "ar") -> str:
        if language == "ar":
            return self.name_ar or self.name_en or str(self.id)
        return self.name_en or self.name_ar or str(self.id)


class Region(Location):
    type: str | None = "region"


class City(Location):
    type: str | None = "city"


class District(Location):
    type: str | None = "district"
