"""Evolution run state enumeration."""

from enum import Enum, auto


class RunState(Enum):
    """
    Evolution run states.

    Flow: IDLE → EVALUATING → BREEDING → EVALUATING ... → FINISHED
    """

    IDLE = auto()
    EVALUATING = auto()
    BREEDING = auto()
    FINISHED = auto()

    def __str__(self) -> str:
        return self.name.title()
