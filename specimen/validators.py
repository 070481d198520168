"""Validation functions for player entries, generated groups, and brackets."""

import math
from collections import Counter

from .bracket import feeder_field, feeder_slots
from .constants import BRACKET_SIZE, ROUND_ONE_SLOTS
from .models import Bracket, Group, Player


def validate_player_entry(name: str, skill) -> list[str]:
    """
    Check a player name and skill entered by an organizer.

    Checks:
    - Name is not blank
    - Skill is a finite number greater than zero

    Args:
        name: Player name as typed
        skill: Skill rating (number or numeric string)

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not name or not str(name).strip():
        errors.append('Player name is required')

    try:
        value = float(skill)
    except (TypeError, ValueError):
        errors.append(f'Skill must be a number, got {skill!r}')
        return errors

    if math.isnan(value) or math.isinf(value):
        errors.append(f'Skill must be a finite number, got {skill!r}')
    elif value <= 0:
        errors.append(f'Skill must be greater than 0, got {value:g}')

    return errors


def validate_grouping(groups: list[Group], eligible: list[Player]) -> list[str]:
    """
    Check that generated groups hold every eligible player exactly once.

    Args:
        groups: Output of generate_balanced_groups
        eligible: Players that should have been assigned

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    assigned = Counter(p.key for group in groups for p in group.members)
    expected = Counter(p.key for p in eligible)

    duplicates = sorted(k for k, n in assigned.items() if n > expected.get(k, 0) and k in expected)
    if duplicates:
        errors.append(f'Players assigned more than once: {", ".join(duplicates)}')

    missing = sorted(k for k in expected if assigned.get(k, 0) < expected[k])
    if missing:
        errors.append(f'Players missing from groups: {", ".join(missing)}')

    strangers = sorted(k for k in assigned if k not in expected)
    if strangers:
        errors.append(f'Players assigned but not checked in: {", ".join(strangers)}')

    return errors


def validate_bracket(bracket: Bracket) -> list[str]:
    """
    Check bracket consistency.

    Checks:
    - Exactly 7 matches
    - Every winner is one of its match's entrants
    - Every semifinal/final entrant is empty or the winner of its feeder match

    Returns:
        List of validation error messages (empty if valid)
    """
    if len(bracket) != BRACKET_SIZE:
        return [f'Bracket has {len(bracket)} matches (expected {BRACKET_SIZE})']

    errors = []
    for slot, match in enumerate(bracket):
        if match.winner is not None and match.winner not in match.teams:
            errors.append(f'Slot {slot} winner {match.winner!r} is not one of its teams')

        if slot in ROUND_ONE_SLOTS:
            continue
        for feeder in feeder_slots(slot):
            entrant = getattr(match, feeder_field(feeder))
            if entrant and entrant != bracket[feeder].winner:
                errors.append(
                    f'Slot {slot} {feeder_field(feeder)} {entrant!r} does not match '
                    f'slot {feeder} winner {bracket[feeder].winner!r}'
                )

    return errors

