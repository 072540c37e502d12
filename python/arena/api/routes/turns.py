"""Turn API routes.

- POST /turns/{turn_id}/vote: record the vote, reveal both models, open the next turn
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from arena.api.deps import get_random_source, get_store
from arena.responses import success_response
from arena.schemas.chat import ModelInfoOut, RevealedModelsOut, VoteRequest, VoteResultOut
from arena.services import turns as turns_service
from arena.services.randomness import RandomSource
from arena.store import InMemoryStore

router = APIRouter(tags=["turns"])


@router.post("/turns/{turn_id}/vote", status_code=201)
async def submit_vote(
    turn_id: UUID,
    body: VoteRequest,
    store: Annotated[InMemoryStore, Depends(get_store)],
    random_source: Annotated[RandomSource, Depends(get_random_source)],
) -> dict:
    """Vote on a turn.

    Errors, in check order:
        E_TURN_NOT_FOUND (404): Turn doesn't exist.
        E_TURN_ALREADY_VOTED (409): Turn has a vote already.
        E_WINNER_REQUIRED (400): winner missing.
        E_INVALID_WINNER (400): winner not in model_a | model_b | tie | both_bad.
    """
    outcome = turns_service.submit_vote(store, turn_id, body.winner, random_source)

    result = VoteResultOut(
        id=outcome.turn.id,
        vote=outcome.turn.vote.value,
        revealed_models=RevealedModelsOut(
            model_a=ModelInfoOut.model_validate(outcome.model_a, from_attributes=True),
            model_b=ModelInfoOut.model_validate(outcome.model_b, from_attributes=True),
        ),
        new_turn_id=outcome.new_turn.id,
        category=outcome.category,
        tags=outcome.tags,
    )
    return success_response(result.model_dump(mode="json"))
