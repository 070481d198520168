"""Pydantic schemas for JSON data validation."""

from pydantic import BaseModel, Field, field_validator

from .constants import (
    BRACKET_SIZE,
    DEFAULT_GROUP_COUNT,
    DEFAULT_GROUP_TRIALS,
    DEFAULT_REMOTE_TABLE,
    DEFAULT_TOP_CHOICES,
    MIN_GROUP_COUNT,
)


class PlayerRecord(BaseModel):
    """Player in the saved roster."""

    name: str = Field(..., min_length=1)
    skill: float = Field(default=0.0, ge=0)
    id: int | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Reject names that are only whitespace."""
        if not v.strip():
            raise ValueError('Player name is blank')
        return v

    class Config:
        extra = 'forbid'


class MatchRecord(BaseModel):
    """One bracket match."""

    team1: str = ''
    team2: str = ''
    winner: str | None = None

    class Config:
        extra = 'forbid'


class StateFile(BaseModel):
    """Complete state.json file structure."""

    players: list[PlayerRecord] = Field(default_factory=list)
    checked_in: list[str] = Field(default_factory=list)
    bracket: list[MatchRecord] = Field(
        default_factory=lambda: [MatchRecord() for _ in range(BRACKET_SIZE)]
    )
    group_count: int = Field(default=DEFAULT_GROUP_COUNT, ge=MIN_GROUP_COUNT)

    @field_validator('bracket')
    @classmethod
    def validate_bracket_size(cls, v):
        """Ensure the bracket has all 7 matches."""
        if len(v) != BRACKET_SIZE:
            raise ValueError(f'Bracket must have {BRACKET_SIZE} matches, got {len(v)}')
        return v

    class Config:
        extra = 'forbid'


class MeetupConfig(BaseModel):
    """Meetup configuration settings."""

    group_trials: int = Field(default=DEFAULT_GROUP_TRIALS, ge=1, le=10000)
    top_choices: int = Field(default=DEFAULT_TOP_CHOICES, ge=1)
    default_group_count: int = Field(default=DEFAULT_GROUP_COUNT, ge=MIN_GROUP_COUNT)
    state_path: str = 'data/state.json'
    log_dir: str = 'logs'
    remote_url: str | None = None
    remote_key: str | None = None
    remote_table: str = DEFAULT_REMOTE_TABLE

    class Config:
        extra = 'forbid'
