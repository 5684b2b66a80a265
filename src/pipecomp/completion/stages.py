# pipecomp.completion.stages - Recognized pipeline stages
from enum import Enum
from typing import Optional


class StageName(str, Enum):
    """Stage names the completion engine recognizes."""
    SEARCH = "$search"
    LIMIT = "$limit"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["StageName"]:
        """Look up a stage by its name, None if it is not recognized."""
        try:
            return cls(name)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value
