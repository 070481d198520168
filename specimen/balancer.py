"""Balanced team generation for scrimmage nights.

Players who are checked in are split into ``group_count`` teams so that the
skill totals are as even as possible. Each trial shuffles the eligible players
and greedily hands every player to the team with the lowest running total.
The trials are ranked by the population standard deviation of the team totals
and one of the most balanced few is picked at random, so generating twice
with the same check-ins usually gives different (but still fair) teams.
"""

import logging
import random
import statistics
from typing import Iterable, Optional

from .constants import DEFAULT_GROUP_TRIALS, DEFAULT_TOP_CHOICES
from .models import Group, Grouping, Player, normalize_name

logger = logging.getLogger('specimen.balancer')


def eligible_players(players: Iterable[Player], attendance: Iterable[str]) -> list[Player]:
    """Players whose normalized name appears in the attendance names."""
    present = {normalize_name(n) for n in attendance}
    return [p for p in players if p.key in present]


def balance_score(totals: list[float]) -> float:
    """Population standard deviation of group totals (lower = more even)."""
    if not totals:
        return 0.0
    return statistics.pstdev(totals)


def _fill_groups(ordered: list[Player], group_count: int) -> tuple[list[list[Player]], list[float]]:
    """Greedy pass: each player joins the first group with the lowest total."""
    teams: list[list[Player]] = [[] for _ in range(group_count)]
    totals = [0.0] * group_count

    for player in ordered:
        target = 0
        for i in range(1, group_count):
            if totals[i] < totals[target]:
                target = i
        teams[target].append(player)
        totals[target] += player.skill

    return teams, totals


def generate_balanced_groups(
    players: Iterable[Player],
    attendance: Iterable[str],
    group_count: int,
    rng: Optional[random.Random] = None,
    trials: int = DEFAULT_GROUP_TRIALS,
    top_choices: int = DEFAULT_TOP_CHOICES,
) -> Grouping:
    """
    Split checked-in players into skill-balanced groups.

    Args:
        players: Full player list
        attendance: Names of players who are present (case-insensitive)
        group_count: Number of groups to build
        rng: Random source (default: a fresh random.Random per call)
        trials: Number of shuffled greedy passes to try
        top_choices: Pick uniformly among this many lowest-score trials

    Returns:
        List of ``group_count`` Groups, or an empty list when nobody is
        eligible or fewer than two groups were requested
    """
    eligible = eligible_players(players, attendance)
    if not eligible or group_count <= 1:
        return []

    if rng is None:
        rng = random.Random()

    candidates = []
    for _ in range(max(1, trials)):
        shuffled = eligible[:]
        rng.shuffle(shuffled)
        teams, totals = _fill_groups(shuffled, group_count)
        candidates.append((balance_score(totals), teams))

    candidates.sort(key=lambda c: c[0])
    score, teams = rng.choice(candidates[:max(1, top_choices)])

    logger.debug(
        f'Generated {group_count} groups from {len(eligible)} players '
        f'(best score {candidates[0][0]:.3f}, chosen {score:.3f})'
    )
    return [Group(members=members) for members in teams]
