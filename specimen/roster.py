"""Player roster and check-in list.

Players are identified by their normalized name, so "Sam", " sam " and "SAM"
are the same person. The check-in list stores names exactly as registered.
"""

import logging
from dataclasses import replace
from typing import Iterable, Optional

from .constants import (
    MAX_SKILL,
    MSG_ALREADY_REGISTERED,
    MSG_CHECKED_IN,
    MSG_NOT_FOUND,
    MSG_REGISTERED,
    PLAYER_VIEWS,
    SKILL_BAND_WIDTH,
    SKILL_BANDS,
)
from .models import Player, normalize_name
from .validators import validate_player_entry

logger = logging.getLogger('specimen.roster')


class Roster:
    """Registered players plus the names checked in tonight."""

    def __init__(
        self,
        players: Optional[Iterable[Player]] = None,
        checked_in: Optional[Iterable[str]] = None,
    ):
        self.players: list[Player] = list(players or [])
        self.checked_in: list[str] = list(checked_in or [])

    def _index(self, name: str) -> int:
        key = normalize_name(name)
        for i, player in enumerate(self.players):
            if player.key == key:
                return i
        return -1

    def find(self, name: str) -> Optional[Player]:
        idx = self._index(name)
        return self.players[idx] if idx != -1 else None

    def register(self, name: str) -> str:
        """Self-registration: adds an unrated player. Returns a feedback message."""
        name = (name or '').strip()
        if not name:
            raise ValueError('Player name is required')

        if self.find(name) is not None:
            return MSG_ALREADY_REGISTERED

        self.players.append(Player(name=name, skill=0.0))
        logger.info(f'Registered {name}')
        return MSG_REGISTERED

    def save_player(self, name: str, skill) -> Player:
        """
        Add a player or update an existing one (matched by normalized name).

        Updating takes the new spelling of the name along with the new skill.

        Raises:
            ValueError: If the name is blank or skill is not a positive number
        """
        errors = validate_player_entry(name, skill)
        if errors:
            raise ValueError('; '.join(errors))

        name = name.strip()
        skill = float(skill)
        idx = self._index(name)
        if idx != -1:
            old = self.players[idx]
            self.players[idx] = replace(old, name=name, skill=skill)
            self._rename_check_in(old.name, name)
            logger.info(f'Updated {name}: skill {old.skill:g} -> {skill:g}')
        else:
            self.players.append(Player(name=name, skill=skill))
            idx = len(self.players) - 1
            logger.info(f'Added {name} with skill {skill:g}')
        return self.players[idx]

    def edit_player(self, index: int, name: str, skill) -> Player:
        """Replace name and skill of the player at ``index``."""
        if not 0 <= index < len(self.players):
            raise IndexError(f'No player at index {index}')
        errors = validate_player_entry(name, skill)
        if errors:
            raise ValueError('; '.join(errors))
        if self._index(name) not in (-1, index):
            raise ValueError(MSG_ALREADY_REGISTERED)

        old = self.players[index]
        self.players[index] = replace(old, name=name.strip(), skill=float(skill))
        self._rename_check_in(old.name, name.strip())
        return self.players[index]

    def _rename_check_in(self, old_name: str, new_name: str) -> None:
        key = normalize_name(old_name)
        self.checked_in = [new_name if normalize_name(n) == key else n for n in self.checked_in]

    def delete_player(self, name: str) -> Optional[Player]:
        """Remove a player and their check-in. Returns the removed player, if any."""
        removed = self.find(name)
        if removed is None:
            return None
        self.players = [p for p in self.players if p.key != removed.key]
        self.checked_in = [n for n in self.checked_in if normalize_name(n) != removed.key]
        logger.info(f'Deleted {removed.name}')
        return removed

    def is_checked_in(self, name: str) -> bool:
        key = normalize_name(name)
        return any(normalize_name(n) == key for n in self.checked_in)

    def check_in(self, name: str) -> str:
        """Check in a registered player. Returns a feedback message."""
        player = self.find(name)
        if player is None:
            return MSG_NOT_FOUND
        if not self.is_checked_in(player.name):
            self.checked_in.append(player.name)
        return MSG_CHECKED_IN

    def check_out(self, name: str) -> None:
        key = normalize_name(name)
        self.checked_in = [n for n in self.checked_in if normalize_name(n) != key]

    def reset_check_ins(self) -> None:
        self.checked_in = []

    def checked_in_players(self) -> list[Player]:
        return [p for p in self.players if self.is_checked_in(p.name)]

    def filter_players(self, view: str = 'all', skill_band: Optional[float] = None) -> list[Player]:
        """
        Players for one list view, highest skill first.

        Args:
            view: 'all', 'in', 'out', 'skill' or 'unrated'
            skill_band: Lower edge of the skill band for the 'skill' view
                (e.g. 3.0 covers 3.0-3.9; 9.0 covers 9.0-10)

        Returns:
            Filtered players sorted by skill descending
        """
        if view not in PLAYER_VIEWS:
            raise ValueError(f'Unknown player view: {view!r}')

        players = self.players
        if view == 'in':
            players = [p for p in players if self.is_checked_in(p.name)]
        elif view == 'out':
            players = [p for p in players if not self.is_checked_in(p.name)]
        elif view == 'skill' and skill_band is not None:
            low = float(skill_band)
            high = MAX_SKILL if low == SKILL_BANDS[-1] else low + SKILL_BAND_WIDTH
            players = [p for p in players if low <= p.skill <= high]
        elif view == 'unrated':
            players = [p for p in players if not p.is_rated]

        return sorted(players, key=lambda p: p.skill, reverse=True)
