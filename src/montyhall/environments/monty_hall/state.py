from dataclasses import dataclass
from enum import Enum, IntEnum, auto

N_DOORS = 3


class DoorContent(Enum):
    """What sits behind a door."""

    PRIZE = "car"
    EMPTY = "goat"


class DoorState(IntEnum):
    """State of each door in the observation vector."""

    CLOSED = 0  # Unopened & unchosen
    GOAT = 1  # Opened and reveals a goat
    CAR = 2  # Opened and reveals a car (a win)
    CHOSEN = 3  # Still closed but currently selected by the player


class Phase(Enum):
    """Progress phase of a round."""

    SELECTING = auto()
    REVEALED = auto()
    DECIDED = auto()


@dataclass(frozen=True, slots=True)
class RoundState:
    """Immutable snapshot of one round of the puzzle.

    Attributes:
        doors (tuple[DoorContent, ...]): contents behind each door, exactly one ``PRIZE``.
        selected_door (int | None): the player's current pick.
        revealed_door (int | None): the door opened by the host.
        phase (Phase): progress of the round.
        won (bool): outcome, only meaningful once ``phase is Phase.DECIDED``.
        switched (bool): whether the final pick left the initial one, only meaningful once decided.
        initial_door (int | None): the first pick, kept after the final decision.
    """

    doors: tuple[DoorContent, ...]
    selected_door: int | None = None
    revealed_door: int | None = None
    phase: Phase = Phase.SELECTING
    won: bool = False
    switched: bool = False
    initial_door: int | None = None

    @property
    def prize_door(self) -> int:
        return self.doors.index(DoorContent.PRIZE)

    @property
    def remaining_door(self) -> int | None:
        """The closed door the player may switch to, once the host has revealed one."""
        if self.revealed_door is None or self.initial_door is None:
            return None
        return next(
            i for i in range(len(self.doors)) if i not in (self.initial_door, self.revealed_door)
        )

    def is_visible(self, door: int) -> bool:
        """Whether the contents of ``door`` are shown to the player."""
        if self.phase is Phase.DECIDED:
            return True
        return door == self.revealed_door

    def observation(self) -> list[int]:
        """Encodes the round as seen by the player, one ``DoorState`` per door."""
        obs = []
        for i, content in enumerate(self.doors):
            if self.is_visible(i):
                obs.append(DoorState.CAR if content is DoorContent.PRIZE else DoorState.GOAT)
            elif i == self.selected_door:
                obs.append(DoorState.CHOSEN)
            else:
                obs.append(DoorState.CLOSED)
        return [int(s) for s in obs]

    def to_dict(self) -> dict:
        return {
            "doors": [c.value for c in self.doors],
            "selected_door": self.selected_door,
            "revealed_door": self.revealed_door,
            "phase": self.phase.name,
            "won": self.won,
            "switched": self.switched,
            "initial_door": self.initial_door,
        }
