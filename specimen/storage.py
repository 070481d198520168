"""Local persistence of the meetup state (roster, check-ins, bracket)."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .bracket import BracketEngine
from .constants import DEFAULT_GROUP_COUNT
from .models import Group, Match, Player
from .roster import Roster
from .schemas import MatchRecord, PlayerRecord, StateFile
from .utils import load_json, save_json
from .validators import validate_bracket

logger = logging.getLogger('specimen.storage')


@dataclass
class MeetupState:
    """Everything the organizer works with on a meetup night."""
    roster: Roster = field(default_factory=Roster)
    engine: BracketEngine = field(default_factory=BracketEngine)
    group_count: int = DEFAULT_GROUP_COUNT
    groups: list[Group] = field(default_factory=list)  # Last generated teams, not saved


def state_from_file(data: StateFile) -> MeetupState:
    """
    Build a MeetupState from a validated state file.

    Raises:
        ValueError: If the saved bracket is inconsistent (a winner that is not
            an entrant, or an entrant that does not match its feeder's winner)
    """
    roster = Roster(
        players=[Player(name=p.name, skill=p.skill, id=p.id) for p in data.players],
        checked_in=data.checked_in,
    )
    bracket = tuple(Match(team1=m.team1, team2=m.team2, winner=m.winner) for m in data.bracket)
    errors = validate_bracket(bracket)
    if errors:
        raise ValueError('; '.join(errors))
    return MeetupState(roster=roster, engine=BracketEngine(bracket), group_count=data.group_count)


def state_to_file(state: MeetupState) -> StateFile:
    """Convert a MeetupState into its saved form."""
    return StateFile(
        players=[PlayerRecord(name=p.name, skill=p.skill, id=p.id) for p in state.roster.players],
        checked_in=list(state.roster.checked_in),
        bracket=[
            MatchRecord(team1=m.team1, team2=m.team2, winner=m.winner)
            for m in state.engine.bracket
        ],
        group_count=state.group_count,
    )


def load_state(path: Path | str, default_group_count: int = DEFAULT_GROUP_COUNT) -> MeetupState:
    """
    Load saved state, or an empty state if the file doesn't exist yet.

    Raises:
        json.JSONDecodeError: If the file is malformed
        ValueError: If the file fails schema validation or holds an
            inconsistent bracket
    """
    path = Path(path)
    if not path.exists():
        logger.info(f'No saved state at {path}, starting fresh')
        return MeetupState(group_count=default_group_count)
    return state_from_file(load_json(path, schema=StateFile))


def save_state(path: Path | str, state: MeetupState) -> None:
    """Write state to disk."""
    save_json(path, state_to_file(state))
    logger.debug(
        f'Saved {len(state.roster.players)} players, '
        f'{len(state.roster.checked_in)} check-ins to {path}'
    )
