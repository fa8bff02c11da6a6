from pydantic import BaseModel, ConfigDict, Field


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str = ""


class CountrySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str = Field(pattern=r"^[A-Z]{3}$")
    common_name: str
    official_name: str = ""
    flag_image_url: str = ""
    flag_alt: str | None = None

    @classmethod
    def from_api(cls, raw: dict) -> "CountrySummary":
        """Build from a REST Countries record (`name`, `cca3`, `flags`)."""
        return cls.model_validate(_summary_fields(raw))


class CountryDetail(CountrySummary):
    capital_cities: list[str] | None = None
    region: str = ""
    subregion: str | None = None
    population: int = Field(default=0, ge=0)
    languages: dict[str, str] | None = None
    currencies: dict[str, Currency] | None = None

    @classmethod
    def from_api(cls, raw: dict) -> "CountryDetail":
        """Build from a full REST Countries record."""
        return cls.model_validate({
            **_summary_fields(raw),
            "capital_cities": raw.get("capital"),
            "region": raw.get("region") or "",
            "subregion": raw.get("subregion") or None,
            "population": raw.get("population") or 0,
            "languages": raw.get("languages"),
            "currencies": raw.get("currencies"),
        })


def _summary_fields(raw: dict) -> dict:
    name = raw.get("name") or {}
    flags = raw.get("flags") or {}
    return {
        "code": raw.get("cca3"),
        "common_name": name.get("common"),
        "official_name": name.get("official") or "",
        "flag_image_url": flags.get("png") or "",
        "flag_alt": flags.get("alt"),
    }
