from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

DEFAULT_WEIGHT = 3
DEFAULT_SCORE = 3
ITEM_KINDS = ("pro", "con")
MIN_WEIGHT = 1
MAX_WEIGHT = 5


def clamp_weight(value: float) -> int:
    """Round to the nearest whole step and keep it inside the 1-5 slider range."""
    return min(MAX_WEIGHT, max(MIN_WEIGHT, int(round(value))))


@dataclass
class Item:
    id: str
    text: str
    weight: int = DEFAULT_WEIGHT
    kind: str = "pro"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "weight": self.weight,
            "type": self.kind,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        kind = data.get("type", "pro")
        if kind not in ITEM_KINDS:
            raise ValueError(f"Unknown item type: {kind!r}")
        return cls(
            id=str(data["id"]),
            text=data.get("text", ""),
            weight=clamp_weight(data.get("weight", DEFAULT_WEIGHT)),
            kind=kind,
        )


@dataclass
class ProsConsState:
    title: str = ""
    items: List[Item] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProsConsState":
        return cls(
            title=str(data.get("title") or ""),
            items=[Item.from_dict(item) for item in data.get("items") or []],
        )


@dataclass
class Criterion:
    id: str
    name: str
    weight: int = DEFAULT_WEIGHT

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "Criterion":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            weight=clamp_weight(data.get("weight", DEFAULT_WEIGHT)),
        )


@dataclass
class Alternative:
    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> "Alternative":
        return cls(id=str(data["id"]), name=data.get("name", ""))


@dataclass
class Rating:
    alternative_id: str
    criterion_id: str
    score: int = DEFAULT_SCORE

    def to_dict(self) -> dict:
        return {
            "alternativeId": self.alternative_id,
            "criterionId": self.criterion_id,
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Rating":
        return cls(
            alternative_id=str(data["alternativeId"]),
            criterion_id=str(data["criterionId"]),
            score=clamp_weight(data.get("score", DEFAULT_SCORE)),
        )


@dataclass
class MatrixState:
    title: str = ""
    criteria: List[Criterion] = field(default_factory=list)
    alternatives: List[Alternative] = field(default_factory=list)
    ratings: List[Rating] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "criteria": [criterion.to_dict() for criterion in self.criteria],
            "alternatives": [alternative.to_dict() for alternative in self.alternatives],
            "ratings": [rating.to_dict() for rating in self.ratings],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MatrixState":
        return cls(
            title=str(data.get("title") or ""),
            criteria=[Criterion.from_dict(item) for item in data.get("criteria") or []],
            alternatives=[Alternative.from_dict(item) for item in data.get("alternatives") or []],
            ratings=[Rating.from_dict(item) for item in data.get("ratings") or []],
        )


@dataclass
class Result:
    alternative_id: str
    name: str
    score: int


@dataclass
class ProsConsSummary:
    pro_total: int
    con_total: int
    net_result: int
    label: str
    pro_share: float
    con_share: float
