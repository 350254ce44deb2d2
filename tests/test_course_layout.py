import pytest

from golfbot.utils.course_layout import parse_course_layout, parse_number_list
from golfbot.utils.leaderboard_exceptions import CourseValidationError


def test_spaces_and_commas_both_separate():
    assert parse_number_list("Mosley", "Pars", " 4,4 3\t5,, 4 ") == [4, 4, 3, 5, 4]


def test_layout_pairs_pars_with_indexes():
    layout = parse_course_layout("Mosley", "4 3 5", "7, 18, 1")
    assert layout == [(4, 7), (3, 18), (5, 1)]


def test_non_numeric_rejected():
    with pytest.raises(CourseValidationError):
        parse_number_list("Mosley", "Pars", "4 four 5")


def test_mismatched_lengths_rejected():
    with pytest.raises(CourseValidationError):
        parse_course_layout("Mosley", "4 4 4", "1 2")
