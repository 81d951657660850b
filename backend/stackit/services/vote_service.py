"""
StackIt Backend: Vote Ledger Rules
===================================

What:  Decides what a vote request does, given the caller's existing vote on
       the same target.
Why:   One vote per (user, target). The rule is pure so it can be tested
       exhaustively without storage.

Transitions (existing → requested):
    none → up/down     cast     delta ±1, save new vote
    up   → up          retract  delta -1, delete vote
    down → down        retract  delta +1, delete vote
    up   → down        switch   delta -2, save with new direction
    down → up          switch   delta +2, save with new direction
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from stackit.schemas.entities import Vote, VoteDirection, VoteTargetType


class VoteAction(str, Enum):
    CAST = "cast"
    RETRACT = "retract"
    SWITCH = "switch"


@dataclass(frozen=True)
class VoteOutcome:
    action: VoteAction
    delta: int
    vote_to_save: Optional[Vote] = None
    vote_to_delete: Optional[Vote] = None

    @property
    def current_direction(self) -> Optional[VoteDirection]:
        """The caller's vote after this outcome is applied (None when retracted)."""
        return self.vote_to_save.direction if self.vote_to_save else None


def resolve_vote(
    existing: Optional[Vote],
    user_id: str,
    target_id: str,
    target_type: VoteTargetType,
    direction: VoteDirection,
) -> VoteOutcome:
    if existing is None:
        vote = Vote(
            user_id=user_id,
            target_id=target_id,
            target_type=target_type,
            direction=direction,
        )
        return VoteOutcome(VoteAction.CAST, direction.weight, vote_to_save=vote)

    if existing.direction == direction:
        return VoteOutcome(VoteAction.RETRACT, -direction.weight, vote_to_delete=existing)

    switched = existing.model_copy(update={"direction": direction})
    return VoteOutcome(VoteAction.SWITCH, 2 * direction.weight, vote_to_save=switched)
