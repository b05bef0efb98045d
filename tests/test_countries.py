import uuid
from types import SimpleNamespace

from brandkeeper.core.countries.schemas import CountryRead
from brandkeeper.core.countries.utils import get_country_flag


def test_flag_from_code():
    assert get_country_flag("MX") == "\U0001F1F2\U0001F1FD"
    assert get_country_flag("us") == "\U0001F1FA\U0001F1F8"
    assert get_country_flag("ES") == "🇪🇸"


def test_flag_from_bad_code_is_empty():
    assert get_country_flag("") == ""
    assert get_country_flag(None) == ""
    assert get_country_flag("USA") == ""
    assert get_country_flag("1A") == ""


def test_country_read_exposes_flag():
    row = SimpleNamespace(id=uuid.uuid4(), name="Perú", code="PE", region="América del Sur")
    assert CountryRead.model_validate(row).model_dump()["flag"] == get_country_flag("PE")
