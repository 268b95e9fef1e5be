"""
English proficiency levels (CEFR)
"""
from enum import IntEnum
from typing import Dict, Optional


class EnglishLevel(IntEnum):
    """
    Six ordered CEFR tiers, beginner to proficient

    The integer value is the id exposed by the lookup endpoints,
    the code (A1..C2) is what review requests carry.
    """
    A1 = 1
    A2 = 2
    B1 = 3
    B2 = 4
    C1 = 5
    C2 = 6

    @property
    def code(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return LEVEL_DISPLAY_NAMES[self]

    @property
    def difficulty(self) -> str:
        """Language complexity the generated material should target"""
        return LEVEL_DIFFICULTY[self]

    @classmethod
    def from_code(cls, code: str) -> Optional["EnglishLevel"]:
        """Resolve 'b2' / 'B2' to a level, None when unknown"""
        return cls.__members__.get((code or "").strip().upper())

    @classmethod
    def from_id(cls, level_id: int) -> Optional["EnglishLevel"]:
        try:
            return cls(level_id)
        except ValueError:
            return None

    @classmethod
    def from_display_name(cls, name: str) -> Optional["EnglishLevel"]:
        """Resolve 'B1 - Intermediate' (case-insensitive), None when unknown"""
        wanted = (name or "").strip().lower()
        for level, label in LEVEL_DISPLAY_NAMES.items():
            if label.lower() == wanted:
                return level
        return None


LEVEL_DISPLAY_NAMES: Dict[EnglishLevel, str] = {
    EnglishLevel.A1: "A1 - Beginner",
    EnglishLevel.A2: "A2 - Elementary",
    EnglishLevel.B1: "B1 - Intermediate",
    EnglishLevel.B2: "B2 - Upper Intermediate",
    EnglishLevel.C1: "C1 - Advanced",
    EnglishLevel.C2: "C2 - Proficient",
}

LEVEL_DIFFICULTY: Dict[EnglishLevel, str] = {
    EnglishLevel.A1: "very basic vocabulary and simple grammar structures",
    EnglishLevel.A2: "basic vocabulary with simple past and present tenses",
    EnglishLevel.B1: "intermediate vocabulary with complex sentence structures",
    EnglishLevel.B2: "advanced vocabulary with sophisticated grammar",
    EnglishLevel.C1: "complex vocabulary with nuanced language usage",
    EnglishLevel.C2: "expert-level vocabulary with native-like complexity",
}
