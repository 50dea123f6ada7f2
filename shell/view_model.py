from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CardView:
    suit: int
    rank: int
    face_up: bool
    highlighted: bool
    label: str


@dataclass(frozen=True)
class PileView:
    name: str
    kind: str
    cards: tuple[CardView, ...]


@dataclass(frozen=True)
class PyramidView:
    rows: int
    # one entry per slot, row by row; None marks a removed card
    slots: tuple[Optional[CardView], ...]
    exposed: tuple[int, ...]


@dataclass(frozen=True)
class GameViewModel:
    variant: str
    title: str
    moves: int
    game_ended: bool
    won: bool
    lost: bool
    holding: int
    hints: tuple[str, ...]
    piles: tuple[PileView, ...]
    pyramid: Optional[PyramidView]


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
