import pytest

from sources.matching import (
    UNKNOWN_YEAR, extract_year, is_year_in_range, normalize_title, normalize_year, verify_identity
)


@pytest.mark.parametrize("title", ["Widget Monthly", "Target Weekly", "a", "Nº 5 Revue!"])
def test_verify_identity_accepts_itself(title):
    assert verify_identity(title, title) is True


def test_verify_identity_rejects_empty_candidate():
    assert verify_identity("", "Target Weekly") is False
    assert verify_identity(None, "Target Weekly") is False


def test_verify_identity_accepts_issue_suffix():
    assert verify_identity("The Target Weekly Issue 4", "Target Weekly") is True


def test_verify_identity_ignores_case_and_punctuation():
    assert verify_identity("TARGET WEEKLY: Vol. 2", "target weekly") is True
    assert verify_identity("Widget-Monthly", "WidgetMonthly") is True


def test_verify_identity_rejects_unrelated_title():
    assert verify_identity("Unrelated Journal", "Target Weekly") is False


def test_verify_identity_is_substring_not_fuzzy():
    # One letter off is a miss
    assert verify_identity("Target Weakly", "Target Weekly") is False


def test_normalize_title_strips_symbols():
    assert normalize_title("Widget*Monthly (2012)!") == "widgetmonthly 2012"
    assert normalize_title(None) == ""


def test_extract_year_from_text():
    assert extract_year("Published 2015") == "2015"


def test_extract_year_rejects_below_range():
    assert extract_year("copyright 1998") == UNKNOWN_YEAR


def test_extract_year_without_digits():
    assert extract_year("no digits here") == UNKNOWN_YEAR
    assert extract_year("") == UNKNOWN_YEAR
    assert extract_year(None) == UNKNOWN_YEAR


def test_extract_year_rejects_above_range():
    assert extract_year("issue 2030 retro") == UNKNOWN_YEAR


def test_extract_year_prefers_20xx_over_earlier_number():
    assert extract_year("Issue 1234 of the 2019 run") == "2019"


def test_extract_year_only_uses_first_match_per_pattern():
    # 2030 is the first hit for both patterns and it is out of range
    assert extract_year("2030 then 1999 then 2012") == UNKNOWN_YEAR


def test_extract_year_ignores_longer_numbers():
    assert extract_year("ISBN 9782012345678") == UNKNOWN_YEAR


def test_is_year_in_range_bounds():
    assert is_year_in_range("2000")
    assert is_year_in_range(2025)
    assert not is_year_in_range(1999)
    assert not is_year_in_range("2026")
    assert not is_year_in_range("soon")
    assert not is_year_in_range(None)


def test_normalize_year_structured_values():
    assert normalize_year("2012") == "2012"
    assert normalize_year(2012) == "2012"
    assert normalize_year("2012-05-01") == "2012"
    assert normalize_year(1985) == UNKNOWN_YEAR
    assert normalize_year(None) == UNKNOWN_YEAR
    assert normalize_year("") == UNKNOWN_YEAR


def test_extract_year_only_reads_ascii_digits():
    assert extract_year("Issue ٢٠١٥") == UNKNOWN_YEAR
    assert extract_year("Issue ٢٠١٥, reprinted 2016") == "2016"
