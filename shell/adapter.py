from solitaire.Cards import Card
from solitaire.Core import Core
from solitaire.Events import (
    CardMove,
    CardSelected,
    CardsRemoved,
    GameEvent,
    ReserveFill,
    RevealTop,
    RunReturned,
    StockDeal,
    StockRecycle,
)
from solitaire.Piles import Foundation, Pyramid, Tableau
from shell.view_model import AnimationEvent, CardView, GameViewModel, PileView, PyramidView


def _card_view(card: Card) -> CardView:
    return CardView(
        suit=card.suit,
        rank=card.rank,
        face_up=card.faceUp,
        highlighted=card.highlighted,
        label=card.gameStr(),
    )


def _kind(name: str, pile) -> str:
    if isinstance(pile, Foundation):
        return "foundation"
    if isinstance(pile, Tableau):
        return "tableau"
    return {"s": "stock", "w": "waste", "r": "reserve", "d": "discard"}.get(name, "pile")


class CoreAdapter:
    """Bridges the Core state/events to a renderer-friendly model."""

    @staticmethod
    def snapshot(core: Core) -> GameViewModel:
        state = core.state
        piles = []
        pyramid = None
        for name, pile in state.named():
            if isinstance(pile, Pyramid):
                pyramid = PyramidView(
                    rows=pile.rows,
                    slots=tuple(None if card is None else _card_view(card) for card in pile.slots),
                    exposed=tuple(pile.exposedSlots()),
                )
                continue
            piles.append(PileView(name=name, kind=_kind(name, pile), cards=tuple(_card_view(c) for c in pile)))
        return GameViewModel(
            variant=core.variant.name,
            title=core.variant.title,
            moves=core.moves,
            game_ended=core.gameEnded,
            won=core.isWon(),
            lost=core.isLost(),
            holding=core.hand.size() if core.isHolding() else 0,
            hints=core.hints,
            piles=tuple(piles),
            pyramid=pyramid,
        )

    @staticmethod
    def event_to_animation(event: GameEvent) -> AnimationEvent:
        if isinstance(event, CardMove):
            return AnimationEvent(
                type="MOVE",
                payload={"src": event.src, "dest": event.dest, "count": event.count},
            )
        if isinstance(event, RunReturned):
            return AnimationEvent(
                type="RETURN",
                payload={"pile": event.origin, "count": event.count},
            )
        if isinstance(event, StockDeal):
            return AnimationEvent(
                type="DEAL",
                payload={"draw_count": event.drawCount, "discarded": event.discarded},
            )
        if isinstance(event, StockRecycle):
            return AnimationEvent(
                type="RECYCLE",
                payload={"count": event.count, "passes": event.passes},
            )
        if isinstance(event, RevealTop):
            return AnimationEvent(type="REVEAL", payload={"pile": event.pile})
        if isinstance(event, ReserveFill):
            return AnimationEvent(type="FILL", payload={"pile": event.tableau})
        if isinstance(event, CardSelected):
            return AnimationEvent(
                type="SELECT",
                payload={"pile": event.pile, "card": str(event.card)},
            )
        if isinstance(event, CardsRemoved):
            return AnimationEvent(
                type="REMOVE",
                payload={"piles": list(event.piles), "cards": [str(c) for c in event.cards]},
            )
        return AnimationEvent(type="UNKNOWN", payload={"event": type(event).__name__})
