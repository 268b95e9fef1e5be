"""
Assignment (question) types
"""
from enum import IntEnum
from typing import Dict, Optional


class AssignmentType(IntEnum):
    """Question formats the quiz generator can produce"""
    MULTIPLE_CHOICE = 1
    FILL_IN_THE_BLANK = 2
    SHORT_ANSWER = 3
    ESSAY = 4

    @property
    def display_name(self) -> str:
        return ASSIGNMENT_TYPE_NAMES[self]

    @classmethod
    def from_id(cls, type_id: int) -> Optional["AssignmentType"]:
        try:
            return cls(type_id)
        except ValueError:
            return None

    @classmethod
    def from_display_name(cls, name: str) -> Optional["AssignmentType"]:
        """Match the label the model echoes back, e.g. 'Fill in the Blank'"""
        wanted = (name or "").strip().lower()
        for assignment_type, label in ASSIGNMENT_TYPE_NAMES.items():
            if label.lower() == wanted:
                return assignment_type
        return None


ASSIGNMENT_TYPE_NAMES: Dict[AssignmentType, str] = {
    AssignmentType.MULTIPLE_CHOICE: "Multiple Choice",
    AssignmentType.FILL_IN_THE_BLANK: "Fill in the Blank",
    AssignmentType.SHORT_ANSWER: "Short Answer",
    AssignmentType.ESSAY: "Essay",
}
