# tests/test_grades.py

import pytest

from core.grades import (
    ALL_GRADES,
    GRADE_TYPOS,
    UNCLASSIFIED_GRADE,
    VALID_GRADES,
    grade_filter_options,
    grade_sort_key,
    normalize_grade,
)


@pytest.mark.parametrize("grade", VALID_GRADES)
def test_canonical_grades_are_unchanged(grade):
    assert normalize_grade(grade) == grade


@pytest.mark.parametrize("typo, corrected", list(GRADE_TYPOS.items()))
def test_known_typos_are_corrected(typo, corrected):
    assert normalize_grade(typo) == corrected
    assert normalize_grade(f"  {typo} ") == corrected


@pytest.mark.parametrize("raw", ["", "   ", "العاشر", "first", "الاول الثاني", None, 7])
def test_unknown_values_are_unclassified(raw):
    assert normalize_grade(raw) == UNCLASSIFIED_GRADE


def test_whitespace_is_trimmed():
    assert normalize_grade("\tالخامس  ") == "الخامس"


def test_filter_options_order():
    options = grade_filter_options()

    assert options[0] == ALL_GRADES
    assert options[1:10] == VALID_GRADES
    assert options[-1] == UNCLASSIFIED_GRADE


def test_sort_key_puts_unclassified_last():
    assert grade_sort_key("الاول") == 0
    assert grade_sort_key("التاسع") == 8
    assert grade_sort_key(UNCLASSIFIED_GRADE) > grade_sort_key("التاسع")
