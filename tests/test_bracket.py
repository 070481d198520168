"""Unit tests for the single elimination bracket."""

import pytest

from specimen.bracket import (
    BracketEngine,
    InvalidFieldError,
    InvalidSlotError,
    InvalidTeamSelectionError,
    advance_winner,
    champion,
    feeder_field,
    feeder_slots,
    next_slot,
    set_match_team,
)
from specimen.models import Match, empty_bracket
from specimen.validators import validate_bracket

TEAMS = ['Aces', 'Blockers', 'Cobras', 'Diggers', 'Eagles', 'Falcons', 'Giants', 'Hawks']


@pytest.fixture
def seeded():
    """Bracket with all eight Round 1 teams entered and no results."""
    engine = BracketEngine()
    for slot in range(4):
        engine.set_match_team(slot, 'team1', TEAMS[slot * 2])
        engine.set_match_team(slot, 'team2', TEAMS[slot * 2 + 1])
    return engine


@pytest.fixture
def semis_decided(seeded):
    """Round 1 and semifinals played: Aces and Eagles reach the final."""
    seeded.advance_winner(0, 'Aces')
    seeded.advance_winner(1, 'Diggers')
    seeded.advance_winner(2, 'Eagles')
    seeded.advance_winner(3, 'Hawks')
    seeded.advance_winner(4, 'Aces')
    seeded.advance_winner(5, 'Eagles')
    return seeded


class TestTopology:
    """Tests for slot wiring."""

    @pytest.mark.parametrize('slot, dest', [(0, 4), (1, 4), (2, 5), (3, 5), (4, 6), (5, 6), (6, None)])
    def test_next_slot(self, slot, dest):
        assert next_slot(slot) == dest

    @pytest.mark.parametrize('slot, field', [(0, 'team1'), (1, 'team2'), (2, 'team1'), (3, 'team2'), (4, 'team1'), (5, 'team2')])
    def test_feeder_field(self, slot, field):
        assert feeder_field(slot) == field

    def test_feeder_slots(self):
        assert feeder_slots(4) == (0, 1)
        assert feeder_slots(5) == (2, 3)
        assert feeder_slots(6) == (4, 5)
        assert feeder_slots(0) == ()


class TestAdvanceWinner:
    """Tests for recording winners and pushing them forward."""

    def test_round_one_fills_semifinal(self):
        """Test advancing slot 0 sets its winner and slot 4 team1."""
        bracket = set_match_team(empty_bracket(), 0, 'team1', 'A')
        bracket = set_match_team(bracket, 0, 'team2', 'B')

        bracket = advance_winner(bracket, 0, 'A')

        assert bracket[0].winner == 'A'
        assert bracket[4].team1 == 'A'
        assert bracket[4].team2 == ''

    def test_odd_slot_fills_team2(self, seeded):
        seeded.advance_winner(3, 'Giants')
        assert seeded.bracket[5].team2 == 'Giants'
        assert seeded.bracket[5].team1 == ''

    def test_semifinal_fills_final(self, seeded):
        seeded.advance_winner(2, 'Eagles')
        seeded.advance_winner(3, 'Hawks')
        seeded.advance_winner(5, 'Hawks')

        assert seeded.bracket[6].team2 == 'Hawks'
        assert seeded.bracket[6].team1 == ''

    def test_full_tournament(self, semis_decided):
        """Test deciding the final crowns a semifinal winner and touches nothing else."""
        before = semis_decided.bracket
        after = semis_decided.advance_winner(6, 'Eagles')

        assert after[6].winner == 'Eagles'
        assert after[6].winner in (after[4].winner, after[5].winner)
        assert after[:6] == before[:6]
        assert champion(after) == 'Eagles'
        assert validate_bracket(after) == []

    def test_idempotent(self, semis_decided):
        """Test repeating the same advance gives the same bracket."""
        for slot, team in [(0, 'Aces'), (4, 'Aces'), (6, 'Aces')]:
            once = semis_decided.advance_winner(slot, team)
            twice = semis_decided.advance_winner(slot, team)
            assert once == twice

    def test_changing_round_one_winner_clears_final(self, semis_decided):
        """Test a new Round 1 result invalidates the semifinal winner and the final."""
        semis_decided.advance_winner(6, 'Aces')
        bracket = semis_decided.advance_winner(0, 'Blockers')

        assert bracket[4] == Match('Blockers', 'Diggers', None)
        assert bracket[6] == Match()
        assert validate_bracket(bracket) == []

    def test_round_one_reconfirm_keeps_semifinal_winner(self, semis_decided):
        """Test re-advancing the same Round 1 winner keeps the semifinal result."""
        bracket = semis_decided.advance_winner(0, 'Aces')

        assert bracket[4].winner == 'Aces'
        # The final is always rebuilt after a Round 1 change
        assert bracket[6] == Match()

    def test_changing_semifinal_winner(self, semis_decided):
        """Test a new semifinal result replaces the final entrant and winner."""
        semis_decided.advance_winner(6, 'Aces')
        bracket = semis_decided.advance_winner(4, 'Diggers')

        assert bracket[6] == Match('Diggers', 'Eagles', None)

    def test_semifinal_change_clears_final_winner_from_other_side(self, semis_decided):
        """Test the final only keeps a winner equal to the team just advanced."""
        semis_decided.advance_winner(6, 'Eagles')
        bracket = semis_decided.advance_winner(4, 'Diggers')

        assert bracket[6] == Match('Diggers', 'Eagles', None)

    def test_semifinal_reconfirm_keeps_final_winner(self, semis_decided):
        semis_decided.advance_winner(6, 'Eagles')
        bracket = semis_decided.advance_winner(5, 'Eagles')

        assert bracket[6] == Match('Aces', 'Eagles', 'Eagles')

    def test_previous_snapshot_untouched(self, seeded):
        before = seeded.bracket
        seeded.advance_winner(0, 'Aces')
        assert before[0].winner is None
        assert before[4].team1 == ''


class TestSetMatchTeam:
    """Tests for editing Round 1 entrants."""

    def test_edit_clears_downstream(self):
        """Test renaming the winning team clears its result, slot 4 team1 and the final."""
        bracket = set_match_team(empty_bracket(), 0, 'team1', 'A')
        bracket = set_match_team(bracket, 0, 'team2', 'B')
        bracket = advance_winner(bracket, 0, 'A')

        bracket = set_match_team(bracket, 0, 'team1', 'C')

        assert bracket[0] == Match('C', 'B', None)
        assert bracket[4].team1 == ''
        assert bracket[6] == Match()

    def test_winner_kept_when_value_equals_winner(self, seeded):
        """Test winner survives when the edited field is set to the winner's name."""
        seeded.advance_winner(0, 'Aces')
        bracket = seeded.set_match_team(0, 'team1', 'Aces')

        assert bracket[0].winner == 'Aces'

    def test_editing_other_field_clears_winner(self, seeded):
        """Test winner is dropped when the edited value differs from it."""
        seeded.advance_winner(0, 'Aces')
        bracket = seeded.set_match_team(0, 'team2', 'Bruisers')

        assert bracket[0] == Match('Aces', 'Bruisers', None)

    def test_semifinal_result_cleared(self, semis_decided):
        """Test an edit in slot 3 clears slot 5 team2, slot 5 winner and the final."""
        semis_decided.advance_winner(6, 'Eagles')
        bracket = semis_decided.set_match_team(3, 'team1', 'Hornets')

        assert bracket[5] == Match('Eagles', '', None)
        assert bracket[6] == Match()
        # Other half of the bracket is untouched
        assert bracket[4] == Match('Aces', 'Diggers', 'Aces')
        assert validate_bracket(bracket) == []

    def test_empty_value_allowed(self, seeded):
        bracket = seeded.set_match_team(1, 'team2', '')
        assert bracket[1].team2 == ''


class TestRejectedCalls:
    """Tests for invalid calls leaving the bracket unchanged."""

    @pytest.mark.parametrize('slot', [4, 5, 6, -1, 7])
    def test_set_outside_round_one(self, seeded, slot):
        before = seeded.bracket
        with pytest.raises(InvalidSlotError):
            seeded.set_match_team(slot, 'team1', 'X')
        assert seeded.bracket == before

    def test_set_unknown_field(self, seeded):
        with pytest.raises(InvalidFieldError):
            seeded.set_match_team(0, 'winner', 'Aces')

    @pytest.mark.parametrize('slot', [-1, 7, 100])
    def test_advance_outside_bracket(self, seeded, slot):
        with pytest.raises(InvalidSlotError):
            seeded.advance_winner(slot, 'Aces')

    def test_advance_team_not_in_match(self, seeded):
        before = seeded.bracket
        with pytest.raises(InvalidTeamSelectionError):
            seeded.advance_winner(0, 'Cobras')
        assert seeded.bracket == before

    def test_advance_into_empty_match(self, seeded):
        """Test semifinal with no entrants cannot be decided."""
        with pytest.raises(InvalidTeamSelectionError):
            seeded.advance_winner(4, 'Aces')

    def test_advance_empty_team(self):
        with pytest.raises(InvalidTeamSelectionError):
            advance_winner(empty_bracket(), 0, '')

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            advance_winner(empty_bracket(), 9, 'A')


class TestEngine:
    """Tests for the engine wrapper."""

    def test_starts_empty(self):
        engine = BracketEngine()
        assert engine.bracket == empty_bracket()
        assert engine.champion is None

    def test_reset(self, semis_decided):
        semis_decided.advance_winner(6, 'Aces')
        assert semis_decided.champion == 'Aces'

        assert semis_decided.reset() == empty_bracket()
        assert semis_decided.champion is None

    def test_wraps_existing_bracket(self, semis_decided):
        engine = BracketEngine(semis_decided.bracket)
        assert engine.bracket == semis_decided.bracket
