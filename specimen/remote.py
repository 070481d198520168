"""Mirror of the roster in a remote, table-backed store.

The store speaks the PostgREST dialect used by hosted Postgres services:
rows live under ``{base_url}/rest/v1/{table}`` and are filtered with query
parameters such as ``id=eq.7``. Each player row carries ``id``, ``name``,
``skill`` and ``checked_in``.

Failed requests raise RemoteStoreError straight away; there are no retries.
"""

import logging
from typing import Any, Optional

import requests

from .constants import DEFAULT_REMOTE_TABLE, REMOTE_TIMEOUT
from .models import Player
from .roster import Roster
from .schemas import MeetupConfig

logger = logging.getLogger('specimen.remote')


class RemoteStoreError(Exception):
    """A request to the remote store failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class RemotePlayerStore:
    """Reads and writes player rows in the remote table."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = DEFAULT_REMOTE_TABLE,
        session: Optional[requests.Session] = None,
    ):
        self.url = f'{base_url.rstrip("/")}/rest/v1/{table}'
        self.session = session or requests.Session()
        self.session.headers.update({
            'apikey': api_key,
            'Authorization': f'Bearer {api_key}',
            'Content-Type': 'application/json',
        })

    def _request(self, method: str, params: dict[str, str], **kwargs) -> Any:
        try:
            response = self.session.request(
                method, self.url, params=params, timeout=REMOTE_TIMEOUT, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f'{method} {self.url} failed: {e}')
            raise RemoteStoreError(f'Remote store unreachable: {e}') from e

        if response.status_code >= 400:
            logger.error(f'{method} {self.url} returned {response.status_code}: {response.text}')
            raise RemoteStoreError(
                f'Remote store returned {response.status_code}: {response.text}',
                status=response.status_code,
            )

        if not response.content:
            return None
        return response.json()

    def fetch_players(self) -> tuple[list[Player], list[str]]:
        """
        Fetch every player row.

        Returns:
            Tuple of (players, names of checked-in players)
        """
        rows = self._request('GET', {'select': '*'}) or []
        players = [
            Player(name=row['name'], skill=float(row.get('skill') or 0), id=row.get('id'))
            for row in rows
        ]
        checked_in = [row['name'] for row in rows if row.get('checked_in')]
        logger.info(f'Fetched {len(players)} players ({len(checked_in)} checked in)')
        return players, checked_in

    def insert_player(self, player: Player) -> Player:
        """Insert a player row. Returns the player with its remote id."""
        rows = self._request(
            'POST',
            {'select': '*'},
            json=[{'name': player.name, 'skill': player.skill}],
            headers={'Prefer': 'return=representation'},
        )
        if rows:
            return Player(name=player.name, skill=player.skill, id=rows[0].get('id'))
        return player

    def update_player(self, player_id: int, **fields: Any) -> None:
        """Update columns of one player row."""
        self._request('PATCH', {'id': f'eq.{player_id}'}, json=fields)

    def set_checked_in(self, player_id: int, checked_in: bool) -> None:
        self.update_player(player_id, checked_in=checked_in)

    def delete_player(self, player_id: int) -> None:
        self._request('DELETE', {'id': f'eq.{player_id}'})

    def reset_check_ins(self) -> None:
        """Check out everyone who is checked in."""
        self._request('PATCH', {'checked_in': 'eq.true'}, json={'checked_in': False})


def sync_roster(store: RemotePlayerStore) -> Roster:
    """Build a fresh Roster from the remote table (remote data wins)."""
    players, checked_in = store.fetch_players()
    return Roster(players=players, checked_in=checked_in)


def from_config(config: MeetupConfig, session: Optional[requests.Session] = None) -> Optional[RemotePlayerStore]:
    """Store for the configured remote, or None when no remote is configured."""
    if not (config.remote_url and config.remote_key):
        return None
    return RemotePlayerStore(
        config.remote_url, config.remote_key, table=config.remote_table, session=session
    )
