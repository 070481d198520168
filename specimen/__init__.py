from .models import Player, Group, Match, Bracket, empty_bracket, normalize_name
from .balancer import generate_balanced_groups, eligible_players, balance_score
from .bracket import (
    BracketEngine,
    BracketError,
    InvalidSlotError,
    InvalidFieldError,
    InvalidTeamSelectionError,
    set_match_team,
    advance_winner,
    champion,
)
from .roster import Roster
from .storage import MeetupState, load_state, save_state
from .remote import RemotePlayerStore, RemoteStoreError, sync_roster

__all__ = [
    # Models
    'Player',
    'Group',
    'Match',
    'Bracket',
    'empty_bracket',
    'normalize_name',
    # Team generation
    'generate_balanced_groups',
    'eligible_players',
    'balance_score',
    # Bracket
    'BracketEngine',
    'BracketError',
    'InvalidSlotError',
    'InvalidFieldError',
    'InvalidTeamSelectionError',
    'set_match_team',
    'advance_winner',
    'champion',
    # Roster and check-ins
    'Roster',
    # Local state
    'MeetupState',
    'load_state',
    'save_state',
    # Remote mirror
    'RemotePlayerStore',
    'RemoteStoreError',
    'sync_roster',
]
