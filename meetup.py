#!/usr/bin/env python3
"""
Athletic Specimen meetup CLI

Manages the player roster, tonight's check-ins, balanced team generation and
the 8-team bracket. State is kept in a local JSON file; when a remote store
is configured the player table is mirrored there and re-synced after every
roster change.

Usage:
    python meetup.py register "Sam Lee"
    python meetup.py save-player "Sam Lee" 6.5
    python meetup.py edit-player 0 "Sam Li" 7
    python meetup.py check-in "sam lee"
    python meetup.py teams --count 3
    python meetup.py bracket set 0 team1 "Spikers"
    python meetup.py bracket advance 0 "Spikers"
    python meetup.py bracket show
"""

import argparse
import random
import sys
from pathlib import Path
from typing import Optional

from specimen import (
    MeetupState,
    RemoteStoreError,
    generate_balanced_groups,
    load_state,
    save_state,
    sync_roster,
)
from specimen.config import get_config, get_state_path
from specimen.constants import MSG_CHECKED_IN, MSG_NOT_FOUND, MSG_REGISTERED, PLAYER_VIEWS, ROUND_NAMES, SKILL_BANDS
from specimen.logging_config import get_logger, setup_logging
from specimen.remote import RemotePlayerStore, from_config

logger = get_logger('specimen.cli')


def format_skill(skill: float) -> str:
    return 'Unset' if not skill else f'{skill:g}'


def print_players(state: MeetupState, view: str, band: Optional[float]) -> None:
    players = state.roster.filter_players(view, band)
    if not players:
        print('No players found.')
        return
    for player in players:
        status = 'Checked In' if state.roster.is_checked_in(player.name) else 'Not Checked In'
        print(f'{player.name:<24} Skill: {format_skill(player.skill):<6} {status}')
    print(f'Checked In: {len(state.roster.checked_in)}')


def print_groups(state: MeetupState) -> None:
    if not state.groups:
        print('No teams generated (need checked-in players and at least 2 teams).')
        return
    for i, group in enumerate(state.groups, 1):
        print(f'Team {i} (Total: {group.total_skill:.1f})')
        for player in group.members:
            print(f'  {player.name} ({format_skill(player.skill)})')


def print_bracket(state: MeetupState) -> None:
    for slot, match in enumerate(state.engine.bracket):
        team1 = match.team1 or 'TBD'
        team2 = match.team2 or 'TBD'
        winner = f' -> {match.winner}' if match.is_decided else ''
        print(f'[{slot}] {ROUND_NAMES[slot]:<10} {team1} vs {team2}{winner}')
    if state.engine.champion:
        print(f'Champion: {state.engine.champion}')


def resync(state: MeetupState, store: Optional[RemotePlayerStore]) -> None:
    """Replace the local roster with the remote one."""
    if store is not None:
        state.roster = sync_roster(store)


def run_command(args: argparse.Namespace, state: MeetupState, store: Optional[RemotePlayerStore]) -> None:
    roster = state.roster
    config = get_config()

    if args.command == 'register':
        message = roster.register(args.name)
        if message == MSG_REGISTERED and store is not None:
            store.insert_player(roster.find(args.name))
            resync(state, store)
        print(message)

    elif args.command == 'save-player':
        existing = roster.find(args.name)
        player = roster.save_player(args.name, args.skill)
        if store is not None:
            if existing is not None and existing.id is not None:
                store.update_player(existing.id, name=player.name, skill=player.skill)
            else:
                store.insert_player(player)
            resync(state, store)
        print(f'Saved {player.name} (skill {player.skill:g})')

    elif args.command == 'edit-player':
        old = roster.players[args.index] if 0 <= args.index < len(roster.players) else None
        player = roster.edit_player(args.index, args.name, args.skill)
        if store is not None and old.id is not None:
            store.update_player(old.id, name=player.name, skill=player.skill)
            resync(state, store)
        print(f'Saved {player.name} (skill {player.skill:g})')

    elif args.command == 'delete-player':
        removed = roster.delete_player(args.name)
        if removed is None:
            print(f'No player named {args.name}')
            return
        if store is not None and removed.id is not None:
            store.delete_player(removed.id)
            resync(state, store)
        print(f'Deleted {removed.name}')

    elif args.command == 'check-in':
        message = roster.check_in(args.name)
        player = roster.find(args.name)
        if message == MSG_CHECKED_IN and store is not None and player.id is not None:
            store.set_checked_in(player.id, True)
            resync(state, store)
        print(message)

    elif args.command == 'check-out':
        player = roster.find(args.name)
        roster.check_out(args.name)
        if store is not None and player is not None and player.id is not None:
            store.set_checked_in(player.id, False)
            resync(state, store)
        print(f'{player.name} checked out' if player is not None else MSG_NOT_FOUND)

    elif args.command == 'reset-check-ins':
        roster.reset_check_ins()
        if store is not None:
            store.reset_check_ins()
            resync(state, store)
        print('All check-ins cleared')

    elif args.command == 'players':
        print_players(state, args.view, args.band)

    elif args.command == 'teams':
        if args.count is not None:
            state.group_count = max(2, args.count)
        rng = random.Random(args.seed) if args.seed is not None else None
        state.groups = generate_balanced_groups(
            roster.players,
            roster.checked_in,
            state.group_count,
            rng=rng,
            trials=config.group_trials,
            top_choices=config.top_choices,
        )
        print_groups(state)

    elif args.command == 'bracket':
        if args.action == 'set':
            state.engine.set_match_team(args.slot, args.field, args.value)
        elif args.action == 'advance':
            state.engine.advance_winner(args.slot, args.team)
        elif args.action == 'reset':
            state.engine.reset()
        print_bracket(state)

    elif args.command == 'sync':
        if store is None:
            print('No remote store configured')
            return
        resync(state, store)
        print(f'Synced {len(state.roster.players)} players')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Athletic Specimen meetup manager')
    parser.add_argument('--state', type=Path, help='State file (default from config)')
    parser.add_argument('--offline', action='store_true', help='Skip the remote store')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.add_argument('--no-log-file', action='store_true', help='Only log to console')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('register', help='Register yourself (skill assigned later)')
    p.add_argument('name')

    p = sub.add_parser('save-player', help='Add a player or update their skill')
    p.add_argument('name')
    p.add_argument('skill')

    p = sub.add_parser('edit-player', help='Rename or re-rate the player at a list position')
    p.add_argument('index', type=int, help='Position in the stored player list (from 0)')
    p.add_argument('name')
    p.add_argument('skill')

    p = sub.add_parser('delete-player', help='Remove a player')
    p.add_argument('name')

    p = sub.add_parser('check-in', help='Check a player in for tonight')
    p.add_argument('name')

    p = sub.add_parser('check-out', help='Check a player out')
    p.add_argument('name')

    sub.add_parser('reset-check-ins', help='Check everyone out')

    p = sub.add_parser('players', help='List players')
    p.add_argument('--view', choices=PLAYER_VIEWS, default='all')
    p.add_argument('--band', type=float, choices=SKILL_BANDS, help='Skill band for --view skill')

    p = sub.add_parser('teams', help='Generate balanced teams from checked-in players')
    p.add_argument('--count', type=int, help='Number of teams (min 2)')
    p.add_argument('--seed', type=int, help='Random seed for repeatable teams')

    p = sub.add_parser('bracket', help='Show or edit the tournament bracket')
    actions = p.add_subparsers(dest='action', required=True)
    actions.add_parser('show')
    actions.add_parser('reset')
    a = actions.add_parser('set', help='Enter a Round 1 team')
    a.add_argument('slot', type=int)
    a.add_argument('field', choices=['team1', 'team2'])
    a.add_argument('value')
    a = actions.add_parser('advance', help='Pick the winner of a match')
    a.add_argument('slot', type=int)
    a.add_argument('team')

    sub.add_parser('sync', help='Pull the roster from the remote store')

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()

    setup_logging(verbose=args.verbose, log_to_file=not args.no_log_file)

    state_path = args.state or get_state_path()
    store = None if args.offline else from_config(config)

    try:
        state = load_state(state_path, default_group_count=config.default_group_count)
        run_command(args, state, store)
    except (ValueError, IndexError, RemoteStoreError) as e:
        logger.error(str(e))
        print(f'Error: {e}', file=sys.stderr)
        return 1

    save_state(state_path, state)
    return 0


if __name__ == '__main__':
    sys.exit(main())
