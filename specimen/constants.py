"""Constants for the meetup toolkit."""

# Team generation
DEFAULT_GROUP_TRIALS = 50   # Random shuffles tried per generation
DEFAULT_TOP_CHOICES = 5     # Pick randomly among this many most balanced trials
DEFAULT_GROUP_COUNT = 2
MIN_GROUP_COUNT = 2

# Bracket topology (8 teams, single elimination)
BRACKET_SIZE = 7
ROUND_ONE_SLOTS = (0, 1, 2, 3)
SEMIFINAL_SLOTS = (4, 5)
FINAL_SLOT = 6
TEAM_FIELDS = ('team1', 'team2')

ROUND_NAMES = {
    0: 'Round 1',
    1: 'Round 1',
    2: 'Round 1',
    3: 'Round 1',
    4: 'Semifinals',
    5: 'Semifinals',
    6: 'Final',
}

# Player list views
PLAYER_VIEWS = ('all', 'in', 'out', 'skill', 'unrated')
SKILL_BANDS = tuple(float(b) for b in range(1, 10))  # 1.0 .. 9.0
SKILL_BAND_WIDTH = 0.9
MAX_SKILL = 10.0

# User feedback messages
MSG_REGISTERED = 'Player registered. Waiting for admin to assign skill.'
MSG_ALREADY_REGISTERED = 'Player already registered.'
MSG_CHECKED_IN = 'You are checked in'
MSG_NOT_FOUND = 'Player not found in history'

# Remote store
DEFAULT_REMOTE_TABLE = 'players'
REMOTE_TIMEOUT = 10  # seconds
