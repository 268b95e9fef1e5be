"""
Writing categories accepted by the review endpoint
"""
from typing import Dict

DEFAULT_CATEGORY = "general writing"

WRITING_CATEGORIES: Dict[str, str] = {
    "essay": "Academic Essay",
    "letter": "Formal/Informal Letter",
    "report": "Report Writing",
    "article": "Article Writing",
    "story": "Creative Writing",
    "email": "Email Writing",
    "description": "Descriptive Writing",
    "opinion": "Opinion Writing",
}


def resolve_category(category: str) -> str:
    """Map a category key to its description, unknown keys fall back to general writing"""
    return WRITING_CATEGORIES.get((category or "").strip().lower(), DEFAULT_CATEGORY)
