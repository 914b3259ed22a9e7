from __future__ import annotations

from dataclasses import replace
from itertools import chain

from decision.core import DecisionMode, clamp_weight, new_id
from models import DEFAULT_SCORE, DEFAULT_WEIGHT, Alternative, Criterion, MatrixState, Rating

STORAGE_KEY = "matrix-decision"


def _live_ids(state: MatrixState):
    return chain(
        (criterion.id for criterion in state.criteria),
        (alternative.id for alternative in state.alternatives),
    )


def set_title(state: MatrixState, title: str) -> MatrixState:
    return replace(
        state,
        title=title or "",
        criteria=list(state.criteria),
        alternatives=list(state.alternatives),
        ratings=list(state.ratings),
    )


def add_criterion(state: MatrixState, name: str) -> MatrixState:
    name = (name or "").strip()
    if not name:
        return state
    criterion = Criterion(id=new_id(_live_ids(state)), name=name, weight=DEFAULT_WEIGHT)
    return replace(state, criteria=state.criteria + [criterion])


def add_alternative(state: MatrixState, name: str) -> MatrixState:
    name = (name or "").strip()
    if not name:
        return state
    alternative = Alternative(id=new_id(_live_ids(state)), name=name)
    new_ratings = [
        Rating(alternative_id=alternative.id, criterion_id=criterion.id, score=DEFAULT_SCORE)
        for criterion in state.criteria
    ]
    return replace(
        state,
        alternatives=state.alternatives + [alternative],
        ratings=state.ratings + new_ratings,
    )


def remove_criterion(state: MatrixState, criterion_id: str) -> MatrixState:
    return replace(
        state,
        criteria=[criterion for criterion in state.criteria if criterion.id != criterion_id],
        ratings=[rating for rating in state.ratings if rating.criterion_id != criterion_id],
    )


def remove_alternative(state: MatrixState, alternative_id: str) -> MatrixState:
    return replace(
        state,
        alternatives=[
            alternative for alternative in state.alternatives if alternative.id != alternative_id
        ],
        ratings=[rating for rating in state.ratings if rating.alternative_id != alternative_id],
    )


def update_criterion_weight(state: MatrixState, criterion_id: str, weight: float) -> MatrixState:
    weight = clamp_weight(weight)
    return replace(
        state,
        criteria=[
            replace(criterion, weight=weight) if criterion.id == criterion_id else criterion
            for criterion in state.criteria
        ],
    )


def update_rating(
    state: MatrixState,
    alternative_id: str,
    criterion_id: str,
    score: float,
) -> MatrixState:
    score = clamp_weight(score)
    ratings = []
    found = False
    for rating in state.ratings:
        if rating.alternative_id == alternative_id and rating.criterion_id == criterion_id:
            # collapse any duplicate left behind by a hand-edited snapshot
            if not found:
                ratings.append(replace(rating, score=score))
            found = True
        else:
            ratings.append(rating)
    if not found:
        ratings.append(Rating(alternative_id=alternative_id, criterion_id=criterion_id, score=score))
    return replace(state, ratings=ratings)


class MatrixMode(DecisionMode):
    id = "matrix"
    name = "Decision Matrix"
    description = (
        "Compare several alternatives across weighted criteria. "
        "Best for choosing between multiple options."
    )
    storage_key = STORAGE_KEY

    def empty_state(self) -> MatrixState:
        return MatrixState()

    def state_from_dict(self, data: dict) -> MatrixState:
        return MatrixState.from_dict(data)
