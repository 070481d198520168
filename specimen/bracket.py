"""Eight-team single elimination bracket.

Slot layout:
    0-3: Round 1 (team names entered by hand)
    4:   Semifinal fed by the winners of slots 0 (team1) and 1 (team2)
    5:   Semifinal fed by the winners of slots 2 (team1) and 3 (team2)
    6:   Final fed by the winners of slots 4 (team1) and 5 (team2)

Every change returns a new Bracket tuple; the previous snapshot is never
modified. Changing a result forward-fills the next round and clears any
results further down the tree that no longer hold.
"""

import logging
from dataclasses import replace
from typing import Optional

from .constants import BRACKET_SIZE, FINAL_SLOT, ROUND_ONE_SLOTS, SEMIFINAL_SLOTS, TEAM_FIELDS
from .models import Bracket, Match, empty_bracket

logger = logging.getLogger('specimen.bracket')


class BracketError(ValueError):
    """Base class for rejected bracket changes."""


class InvalidSlotError(BracketError):
    """Slot index is outside the range the operation accepts."""


class InvalidFieldError(BracketError):
    """Field name is not 'team1' or 'team2'."""


class InvalidTeamSelectionError(BracketError):
    """Selected winner is not one of the match's entrants."""


def next_slot(slot: int) -> Optional[int]:
    """Slot that the winner of ``slot`` advances to (None for the final)."""
    if slot in ROUND_ONE_SLOTS:
        return SEMIFINAL_SLOTS[0] + slot // 2
    if slot in SEMIFINAL_SLOTS:
        return FINAL_SLOT
    return None


def feeder_field(slot: int) -> str:
    """Field in the next match that the winner of ``slot`` fills."""
    return TEAM_FIELDS[slot % 2]


def feeder_slots(slot: int) -> tuple[int, ...]:
    """Slots whose winners feed ``slot`` (empty for Round 1)."""
    return tuple(s for s in range(BRACKET_SIZE) if next_slot(s) == slot)


def _check_slot(bracket: Bracket, slot: int, allowed) -> None:
    if len(bracket) != BRACKET_SIZE:
        raise BracketError(f'Bracket must have {BRACKET_SIZE} matches, got {len(bracket)}')
    if not isinstance(slot, int) or slot not in allowed:
        raise InvalidSlotError(f'Slot {slot!r} not in {min(allowed)}-{max(allowed)}')


def _keep_if(winner: Optional[str], team: str) -> Optional[str]:
    return winner if winner == team else None


def set_match_team(bracket: Bracket, slot: int, field: str, value: str) -> Bracket:
    """
    Set a Round 1 entrant and clear the results that depended on it.

    The match keeps its winner only when the winner equals the new value.
    The dependent semifinal loses this feeder's entrant and its winner, and
    the final is cleared completely.

    Raises:
        InvalidSlotError: slot is not a Round 1 slot
        InvalidFieldError: field is not 'team1' or 'team2'
    """
    _check_slot(bracket, slot, ROUND_ONE_SLOTS)
    if field not in TEAM_FIELDS:
        raise InvalidFieldError(f'Unknown match field: {field!r}')

    updated = list(bracket)
    match = updated[slot]
    updated[slot] = replace(match, **{field: value, 'winner': _keep_if(match.winner, value)})

    dest = next_slot(slot)
    updated[dest] = replace(updated[dest], **{feeder_field(slot): '', 'winner': None})
    updated[FINAL_SLOT] = Match()

    return tuple(updated)


def advance_winner(bracket: Bracket, slot: int, team: str) -> Bracket:
    """
    Record ``team`` as the winner of ``slot`` and push it forward.

    Round 1 winners fill their semifinal and reset the final. Semifinal
    winners fill the final. The next match keeps its own winner only if it
    is still the advancing team.

    Raises:
        InvalidSlotError: slot is not 0-6
        InvalidTeamSelectionError: team is not one of the match's entrants
    """
    _check_slot(bracket, slot, range(BRACKET_SIZE))
    match = bracket[slot]
    if not team or team not in match.teams:
        raise InvalidTeamSelectionError(
            f'{team!r} is not playing in slot {slot} ({match.team1!r} vs {match.team2!r})'
        )

    updated = list(bracket)
    updated[slot] = replace(match, winner=team)

    dest = next_slot(slot)
    if dest is not None:
        target = updated[dest]
        updated[dest] = replace(
            target, **{feeder_field(slot): team, 'winner': _keep_if(target.winner, team)}
        )
        if slot in ROUND_ONE_SLOTS:
            updated[FINAL_SLOT] = Match()

    return tuple(updated)


def champion(bracket: Bracket) -> Optional[str]:
    """Winner of the final, if decided."""
    return bracket[FINAL_SLOT].winner


class BracketEngine:
    """Holds the current bracket snapshot and applies changes to it."""

    def __init__(self, bracket: Optional[Bracket] = None):
        self._bracket = tuple(bracket) if bracket is not None else empty_bracket()

    @property
    def bracket(self) -> Bracket:
        return self._bracket

    def set_match_team(self, slot: int, field: str, value: str) -> Bracket:
        self._bracket = set_match_team(self._bracket, slot, field, value)
        logger.debug(f'Slot {slot} {field} set to {value!r}')
        return self._bracket

    def advance_winner(self, slot: int, team: str) -> Bracket:
        self._bracket = advance_winner(self._bracket, slot, team)
        logger.debug(f'Slot {slot} won by {team!r}')
        return self._bracket

    def reset(self) -> Bracket:
        self._bracket = empty_bracket()
        return self._bracket

    @property
    def champion(self) -> Optional[str]:
        return champion(self._bracket)
