"""
Description:
Interview type enumeration shared by question and feedback requests.

Dependencies:
- enum: For the string-valued enumeration.
"""
from enum import Enum
from typing import Optional

class InterviewType(str, Enum):
    TECHNICAL = "Technical"
    BEHAVIORAL = "Behavioral"
    MIXED = "Mixed"

    @classmethod
    def parse(cls, value: str) -> Optional["InterviewType"]:
        """Case-insensitive lookup. Returns None for unknown values."""
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None
