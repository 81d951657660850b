"""
StackIt Backend: Vote Ledger Rule Tests
========================================

What:  Tests for resolve_vote, the pure one-vote-per-user transition rule.
"""

import pytest

from stackit.schemas.entities import Vote, VoteDirection, VoteTargetType
from stackit.services.vote_service import VoteAction, resolve_vote

UP = VoteDirection.UP
DOWN = VoteDirection.DOWN


def existing_vote(direction):
    return Vote(user_id="1", target_id="q1", target_type=VoteTargetType.QUESTION, direction=direction)


class TestResolveVote:
    @pytest.mark.parametrize("direction,delta", [(UP, 1), (DOWN, -1)])
    def test_first_vote_is_cast(self, direction, delta):
        outcome = resolve_vote(None, "1", "q1", VoteTargetType.QUESTION, direction)
        assert outcome.action is VoteAction.CAST
        assert outcome.delta == delta
        assert outcome.vote_to_save.direction is direction
        assert outcome.vote_to_save.user_id == "1"
        assert outcome.vote_to_delete is None
        assert outcome.current_direction is direction

    @pytest.mark.parametrize("direction,delta", [(UP, -1), (DOWN, 1)])
    def test_same_direction_retracts(self, direction, delta):
        current = existing_vote(direction)
        outcome = resolve_vote(current, "1", "q1", VoteTargetType.QUESTION, direction)
        assert outcome.action is VoteAction.RETRACT
        assert outcome.delta == delta
        assert outcome.vote_to_delete == current
        assert outcome.vote_to_save is None
        assert outcome.current_direction is None

    @pytest.mark.parametrize("before,after,delta", [(UP, DOWN, -2), (DOWN, UP, 2)])
    def test_opposite_direction_switches(self, before, after, delta):
        current = existing_vote(before)
        outcome = resolve_vote(current, "1", "q1", VoteTargetType.QUESTION, after)
        assert outcome.action is VoteAction.SWITCH
        assert outcome.delta == delta
        assert outcome.vote_to_save.id == current.id
        assert outcome.vote_to_save.direction is after
        # the ledger entry passed in is left as it was
        assert current.direction is before

    def test_cast_then_retract_nets_zero(self):
        cast = resolve_vote(None, "1", "q1", VoteTargetType.QUESTION, UP)
        retract = resolve_vote(cast.vote_to_save, "1", "q1", VoteTargetType.QUESTION, UP)
        assert cast.delta + retract.delta == 0
