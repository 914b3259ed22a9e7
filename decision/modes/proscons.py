from __future__ import annotations

from dataclasses import replace

from decision.core import DecisionMode, clamp_weight, new_id
from models import DEFAULT_WEIGHT, ITEM_KINDS, Item, ProsConsState

STORAGE_KEY = "proscons-decision"


def set_title(state: ProsConsState, title: str) -> ProsConsState:
    return replace(state, title=title or "", items=list(state.items))


def add_item(state: ProsConsState, text: str, kind: str) -> ProsConsState:
    if kind not in ITEM_KINDS:
        raise ValueError(f"Item kind must be one of {ITEM_KINDS}, got {kind!r}")
    text = (text or "").strip()
    if not text:
        return state
    item = Item(
        id=new_id(existing.id for existing in state.items),
        text=text,
        weight=DEFAULT_WEIGHT,
        kind=kind,
    )
    return replace(state, items=state.items + [item])


def remove_item(state: ProsConsState, item_id: str) -> ProsConsState:
    return replace(state, items=[item for item in state.items if item.id != item_id])


def update_item_weight(state: ProsConsState, item_id: str, weight: float) -> ProsConsState:
    weight = clamp_weight(weight)
    return replace(
        state,
        items=[
            replace(item, weight=weight) if item.id == item_id else item
            for item in state.items
        ],
    )


class ProsConsMode(DecisionMode):
    id = "proscons"
    name = "Weighted Pros & Cons"
    description = (
        "List the advantages and disadvantages of a single decision with weighted importance. "
        "Best for yes/no decisions."
    )
    storage_key = STORAGE_KEY

    def empty_state(self) -> ProsConsState:
        return ProsConsState()

    def state_from_dict(self, data: dict) -> ProsConsState:
        return ProsConsState.from_dict(data)
