import pytest
from pydantic import ValidationError

from models.country import CountryDetail, CountrySummary
from country_data import COUNTRIES


def test_summary_from_api():
    summary = CountrySummary.from_api(COUNTRIES[3])
    assert summary.code == "FRA"
    assert summary.common_name == "France"
    assert summary.official_name == "French Republic"
    assert summary.flag_image_url == "https://flagcdn.com/w320/fra.png"
    assert summary.flag_alt == "The flag of France."


def test_detail_from_api():
    detail = CountryDetail.from_api(COUNTRIES[4])
    assert detail.code == "AFG"
    assert detail.capital_cities == ["Kabul"]
    assert detail.subregion == "Southern Asia"
    assert list(detail.languages.values()) == ["Dari", "Pashto", "Turkmen"]
    assert detail.currencies["AFN"].name == "Afghan afghani"


def test_detail_from_api_optional_fields_absent():
    detail = CountryDetail.from_api(COUNTRIES[5])
    assert detail.capital_cities is None
    assert detail.subregion is None
    assert detail.languages is None
    assert detail.currencies is None


@pytest.mark.parametrize("code", [None, "FR", "FRAN", "fra", "F1A"])
def test_code_must_be_three_uppercase_letters(code):
    raw = {**COUNTRIES[3], "cca3": code}
    with pytest.raises(ValidationError):
        CountrySummary.from_api(raw)


def test_population_cannot_be_negative():
    with pytest.raises(ValidationError):
        CountryDetail.from_api({**COUNTRIES[3], "population": -1})


def test_records_are_immutable():
    summary = CountrySummary.from_api(COUNTRIES[3])
    with pytest.raises(ValidationError):
        summary.common_name = "Gaul"
