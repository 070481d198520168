"""Data models for the meetup toolkit."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


def normalize_name(name: Optional[str]) -> str:
    """Normalize a player name for case/whitespace-insensitive comparison."""
    return str(name or '').strip().lower()


@dataclass(frozen=True)
class Player:
    """A registered player. A skill of 0 means the player is unrated."""
    name: str
    skill: float = 0.0
    id: Optional[int] = None  # Row id in the remote player table

    @property
    def key(self) -> str:
        return normalize_name(self.name)

    @property
    def is_rated(self) -> bool:
        return bool(self.skill)


@dataclass
class Group:
    """Players assigned together by one team generation pass."""
    members: List[Player] = field(default_factory=list)

    @property
    def total_skill(self) -> float:
        return sum(p.skill for p in self.members)

    def __len__(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class Match:
    """One bracket match. ``winner`` is either None or one of the entrants."""
    team1: str = ''
    team2: str = ''
    winner: Optional[str] = None

    @property
    def teams(self) -> List[str]:
        """Entrants that have been filled in."""
        return [t for t in (self.team1, self.team2) if t]

    @property
    def is_decided(self) -> bool:
        return self.winner is not None


Grouping = List[Group]
Bracket = Tuple[Match, ...]  # Always 7 matches, see bracket.py for topology


def empty_bracket() -> Bracket:
    """Bracket with all 7 matches empty."""
    return tuple(Match() for _ in range(7))
