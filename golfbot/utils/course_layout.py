"""
Parsing for course layouts typed into a slash command.

Pars and handicap indexes are given as two lists of 18 numbers, separated by
spaces or commas, in hole order.
"""

import re
from typing import List, Tuple

from golfbot.utils.leaderboard_exceptions import CourseValidationError


def parse_number_list(course_name: str, label: str, text: str) -> List[int]:
    """
    Split ``text`` on commas and whitespace into integers.

    Raises:
        CourseValidationError: If any item is not a whole number
    """
    items = [item for item in re.split(r"[\s,]+", text.strip()) if item]
    try:
        return [int(item) for item in items]
    except ValueError:
        raise CourseValidationError(course_name, f"{label} must be whole numbers, got '{text}'")


def parse_course_layout(course_name: str, pars: str, indexes: str) -> List[Tuple[int, int]]:
    """
    Pair pars with handicap indexes hole by hole.

    Hole count and value ranges are checked by Database.create_course; only
    the two lists having the same length is checked here.

    Returns:
        List of (par, handicap_index) in hole order
    """
    par_values = parse_number_list(course_name, "Pars", pars)
    index_values = parse_number_list(course_name, "Handicap indexes", indexes)
    if len(par_values) != len(index_values):
        raise CourseValidationError(
            course_name,
            f"{len(par_values)} pars but {len(index_values)} handicap indexes"
        )
    return list(zip(par_values, index_values))
