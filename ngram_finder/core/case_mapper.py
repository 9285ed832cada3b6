from __future__ import annotations

from enum import Enum

from ngram_finder.core.errors import InvalidParameterError


class CaseMapper(str, Enum):
    """Normalization applied to every string before n-gram extraction."""
    NO_CASE_CHANGE = "no_case_change"
    FORCE_TO_LOWER = "force_to_lower"

    def normalize(self, s: str) -> str:
        if self is CaseMapper.FORCE_TO_LOWER:
            return s.lower()
        return s

    def __call__(self, s: str) -> str:
        return self.normalize(s)

    @classmethod
    def coerce(cls, value: CaseMapper | str) -> CaseMapper:
        """
        Accept a CaseMapper or the name/value of one ("force_to_lower", "FORCE_TO_LOWER").

        Raises:
            InvalidParameterError: If value names no known policy
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for mapper in cls:
                if mapper.value == key:
                    return mapper
        valid = ", ".join(m.value for m in cls)
        raise InvalidParameterError(f"Unknown case mapper {value!r} (expected one of: {valid})")
