from __future__ import annotations

from typing import List, Optional

import numpy as np

from models import DEFAULT_SCORE, Item, MatrixState, ProsConsState, ProsConsSummary, Result

RESULT_MESSAGES = {
    "YES": "Leaning toward YES",
    "NO": "Leaning toward NO",
    "TIE": "You're on the fence",
}


def share(part: float, total: float) -> float:
    if total == 0:
        return 0.0
    return part / total


def get_rating(state: MatrixState, alternative_id: str, criterion_id: str) -> int:
    for rating in state.ratings:
        if rating.alternative_id == alternative_id and rating.criterion_id == criterion_id:
            return rating.score
    return DEFAULT_SCORE


def calculate_score(state: MatrixState, alternative_id: str) -> int:
    return sum(
        get_rating(state, alternative_id, criterion.id) * criterion.weight
        for criterion in state.criteria
    )


def score_matrix(state: MatrixState) -> np.ndarray:
    """Ratings as an alternatives x criteria array, unrated cells filled with the default."""
    matrix = np.full((len(state.alternatives), len(state.criteria)), DEFAULT_SCORE, dtype=int)
    rows = {alternative.id: idx for idx, alternative in enumerate(state.alternatives)}
    columns = {criterion.id: idx for idx, criterion in enumerate(state.criteria)}
    filled = set()
    for rating in state.ratings:
        row = rows.get(rating.alternative_id)
        column = columns.get(rating.criterion_id)
        # first rating for a pair wins, matching get_rating
        if row is not None and column is not None and (row, column) not in filled:
            matrix[row, column] = rating.score
            filled.add((row, column))
    return matrix


def rank_alternatives(state: MatrixState) -> List[Result]:
    """Alternatives by weighted score, highest first; equal scores keep insertion order."""
    if not state.alternatives:
        return []
    weights = np.array([criterion.weight for criterion in state.criteria], dtype=int)
    scores = score_matrix(state).dot(weights)
    order = np.argsort(-scores, kind="stable")
    return [
        Result(
            alternative_id=state.alternatives[idx].id,
            name=state.alternatives[idx].name,
            score=int(scores[idx]),
        )
        for idx in order
    ]


def winner(state: MatrixState) -> Optional[Result]:
    ranked = rank_alternatives(state)
    return ranked[0] if ranked else None


def pros(state: ProsConsState) -> List[Item]:
    return [item for item in state.items if item.kind == "pro"]


def cons(state: ProsConsState) -> List[Item]:
    return [item for item in state.items if item.kind == "con"]


def pro_total(state: ProsConsState) -> int:
    return sum(item.weight for item in pros(state))


def con_total(state: ProsConsState) -> int:
    return sum(item.weight for item in cons(state))


def net_result(state: ProsConsState) -> int:
    return pro_total(state) - con_total(state)


def result_label(net: int) -> str:
    if net > 0:
        return "YES"
    if net < 0:
        return "NO"
    return "TIE"


def result_message(net: int) -> str:
    return RESULT_MESSAGES[result_label(net)]


def summarize(state: ProsConsState) -> ProsConsSummary:
    pro = pro_total(state)
    con = con_total(state)
    return ProsConsSummary(
        pro_total=pro,
        con_total=con,
        net_result=pro - con,
        label=result_label(pro - con),
        pro_share=share(pro, pro + con),
        con_share=share(con, pro + con),
    )
