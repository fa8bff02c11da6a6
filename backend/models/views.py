from pydantic import BaseModel

from models.country import CountryDetail, CountrySummary

NO_MATCHES_MESSAGE = "No countries found."


class CountryDisplay(BaseModel):
    official_name: str
    capital: str
    region: str
    population: str
    languages: str
    currencies: str


class CountryView(BaseModel):
    country: CountryDetail
    display: CountryDisplay


class DirectoryView(BaseModel):
    query: str = ""
    total: int = 0
    count: int = 0
    countries: list[CountrySummary] = []
    empty: bool = False
    message: str | None = None

    @classmethod
    def build(
        cls,
        directory: list[CountrySummary],
        matches: list[CountrySummary],
        query: str,
    ) -> "DirectoryView":
        return cls(
            query=query,
            total=len(directory),
            count=len(matches),
            countries=matches,
            empty=not matches,
            message=None if matches else NO_MATCHES_MESSAGE,
        )
