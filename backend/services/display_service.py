"""Display strings for the country detail view."""

from models.country import CountryDetail, Currency
from models.views import CountryDisplay

NOT_AVAILABLE = "N/A"


def format_capital(capital_cities: list[str] | None) -> str:
    return ", ".join(capital_cities) if capital_cities else NOT_AVAILABLE


def format_region(region: str, subregion: str | None) -> str:
    return f"{region} ({subregion})" if subregion else region


def format_population(population: int) -> str:
    return f"{population:,}"


def format_languages(languages: dict[str, str] | None) -> str:
    # Mapping order is the provider's order
    return ", ".join(languages.values()) if languages else NOT_AVAILABLE


def format_currencies(currencies: dict[str, Currency] | None) -> str:
    if not currencies:
        return NOT_AVAILABLE
    return ", ".join(f"{c.name} ({c.symbol})" for c in currencies.values())


def describe(country: CountryDetail) -> CountryDisplay:
    return CountryDisplay(
        official_name=country.official_name,
        capital=format_capital(country.capital_cities),
        region=format_region(country.region, country.subregion),
        population=format_population(country.population),
        languages=format_languages(country.languages),
        currencies=format_currencies(country.currencies),
    )
