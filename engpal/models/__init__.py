"""
Domain enumerations and lookup tables
"""
from engpal.models.english_level import EnglishLevel, LEVEL_DISPLAY_NAMES
from engpal.models.assignment_type import AssignmentType, ASSIGNMENT_TYPE_NAMES
from engpal.models.writing_category import WRITING_CATEGORIES, resolve_category

__all__ = [
    "EnglishLevel",
    "LEVEL_DISPLAY_NAMES",
    "AssignmentType",
    "ASSIGNMENT_TYPE_NAMES",
    "WRITING_CATEGORIES",
    "resolve_category",
]
