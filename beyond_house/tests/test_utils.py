from beyond_house.content_schemas import PAGE_CONTENT_SCHEMAS, field_default, field_input_name
from beyond_house.models import normalize_form_source, normalize_submission_status
from beyond_house.utils import format_benefits, is_valid_url, parse_benefits, parse_int


def test_benefits_text_round_trip():
    assert parse_benefits("  Gypsum \n\n\nLED lighting\n") == ["Gypsum", "LED lighting"]
    assert parse_benefits("") == []
    assert format_benefits(["Gypsum", "LED lighting"]) == "Gypsum\nLED lighting"
    assert format_benefits(None) == ""


def test_parse_int_clamps():
    assert parse_int("7", default=5, min_value=1, max_value=5) == 5
    assert parse_int("-2", default=5, min_value=1, max_value=5) == 1
    assert parse_int("abc", default=5) == 5


def test_is_valid_url_accepts_local_media():
    assert is_valid_url("")
    assert is_valid_url("https://cdn.example.com/a.jpg")
    assert is_valid_url("/media/portfolio/1-ab.jpg")
    assert not is_valid_url("javascript:alert(1)")
    assert not is_valid_url("ftp://example.com/a.jpg")


def test_normalizers_fall_back_to_defaults():
    assert normalize_submission_status("CONTACTED") == "contacted"
    assert normalize_submission_status("archived") == "unread"
    assert normalize_form_source("quote") == "quote"
    assert normalize_form_source("newsletter") == "contact"


def test_schema_field_defaults_and_names():
    home = PAGE_CONTENT_SCHEMAS["home"]
    fields = {(field["section"], field["key"]): field for field in home["fields"]}
    assert field_default(home["defaults"], fields[("hero", "heading")]) == "Beyond House Interior Construction"
    assert len(field_default(home["defaults"], fields[("features", "items")])) == 4
    assert field_input_name(fields[("features", "items")], "title") == "features__items__title"
