from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from solitaire.Cards import KING, Card, newDeck
from solitaire.Errors import OutOfDeck, UnknownVariant
from solitaire.Events import GameEvent, ReserveFill, RevealTop, StockDeal, StockRecycle
from solitaire.Piles import (
    INVALID_MOVE,
    Foundation,
    FoundationRule,
    MoveResult,
    Pile,
    Pyramid,
    SuitRegistry,
    Tableau,
    TableauRule,
    canRemoveAlone,
    canRemovePair,
    followsDown,
    yearDigits,
)

logger = logging.getLogger(__name__)

AMERICAN_TOAD = "american_toad"
ANNO_DOMINI = "anno_domini"
ARGOS = "argos"
AZTEC_PYRAMID = "aztec_pyramid"

DEFAULT_VARIANT = ANNO_DOMINI


class GameConfig:
    def __init__(self, variant=DEFAULT_VARIANT, seed=None, year=None, drawCount=1, stockPasses=None,
                 reserveSize=20, pyramidRows=7):
        self.variant = variant
        self.seed = seed
        # None uses the current calendar year.
        self.year = year
        self.drawCount = drawCount
        # None means the waste may be turned over without limit.
        self.stockPasses = stockPasses
        self.reserveSize = reserveSize
        self.pyramidRows = pyramidRows

    def currentYear(self) -> int:
        if self.year is not None:
            return int(self.year)
        return date.today().year

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"GameConfig({fields})"


@dataclass
class GameState:
    """Every pile of one deal. Piles a variant does not use stay empty or None."""

    variant: str
    stock: Pile = field(default_factory=Pile)
    waste: Pile = field(default_factory=Pile)
    reserve: Optional[Pile] = None
    discard: Optional[Pile] = None
    foundations: list = field(default_factory=list)
    tableaux: list = field(default_factory=list)
    pyramid: Optional[Pyramid] = None
    drawCount: int = 1
    stockPasses: Optional[int] = None
    passes: int = 0

    def named(self) -> list[tuple[str, Pile]]:
        out = [("s", self.stock), ("w", self.waste)]
        if self.reserve is not None:
            out.append(("r", self.reserve))
        if self.discard is not None:
            out.append(("d", self.discard))
        out.extend((f"f{i}", pile) for i, pile in enumerate(self.foundations))
        out.extend((f"t{i}", pile) for i, pile in enumerate(self.tableaux))
        if self.pyramid is not None:
            out.append(("p", self.pyramid))
        return out

    def nameOf(self, pile: Pile) -> str:
        for name, candidate in self.named():
            if candidate is pile:
                return name
        raise ValueError("pile does not belong to this game")

    def pileByName(self, name: str) -> Optional[Pile]:
        for candidate_name, pile in self.named():
            if candidate_name == name:
                return pile
        return None

    def cardCount(self) -> int:
        return sum(pile.size() for _, pile in self.named())


def _dealFaceUp(source: list, pile: Pile, count: int):
    for _ in range(count):
        card = source.pop()
        card.faceUp = True
        pile.place(card)


def _fillStock(state: GameState, source: list):
    for card in source:
        card.faceUp = False
        state.stock.place(card)
    source.clear()


class Variant:
    """
    Layout, pick-up, drop and end-of-game rules of one game.

    Piles carry their own acceptance rules; a variant only adds restrictions
    on top of them (which piles may be picked from, which destinations are
    tried first) and decides when the game is over.
    """
    name = ""
    title = ""
    decks = 1
    deckSize = 52
    usesRemoval = False

    def requiredCards(self, config: GameConfig) -> int:
        return self.deckSize

    def buildDeck(self, rng) -> list:
        deck = newDeck(self.decks)
        rng.shuffle(deck)
        return deck

    def newGame(self, deck, suitsUsed: SuitRegistry = None, config: GameConfig = None, rng=None) -> GameState:
        config = config or GameConfig(self.name)
        needed = self.requiredCards(config)
        if len(deck) < needed:
            raise OutOfDeck(needed, len(deck))
        state = GameState(variant=self.name, drawCount=config.drawCount, stockPasses=config.stockPasses)
        self.layout(state, list(deck), suitsUsed if suitsUsed is not None else SuitRegistry(), config, rng or random)
        logger.debug("dealt %s: %d cards on the table", self.name, state.cardCount())
        return state

    def layout(self, state: GameState, source: list, suitsUsed: SuitRegistry, config: GameConfig, rng):
        raise NotImplementedError

    # ---- picking up -------------------------------------------------------

    def pickupSources(self, state: GameState) -> list:
        sources = [state.waste]
        if state.reserve is not None:
            sources.append(state.reserve)
        return sources + list(state.foundations) + list(state.tableaux)

    def canLiftFrom(self, tableau: Tableau, index: int) -> bool:
        return True

    def pickupRun(self, state: GameState, pile: Pile, probe=None) -> Optional[Pile]:
        """Take the run at ``probe`` off ``pile``; None leaves the pile untouched."""
        if pile.isEmpty() or not any(pile is source for source in self.pickupSources(state)):
            return None
        if isinstance(pile, Tableau):
            return self._pickupFromTableau(pile, probe)
        top = pile.top()
        if not top.faceUp:
            return None
        pile.selectTop()
        return Pile((pile.pop(),))

    def _pickupFromTableau(self, tableau: Tableau, probe) -> Optional[Pile]:
        if probe is not None and not isinstance(probe, int):
            return None
        size = tableau.size()
        index = size - 1 if probe is None else probe
        if index < 0:
            index += size
        if not 0 <= index < size or not self.canLiftFrom(tableau, index):
            return None
        run = tableau.popCardsFrom(index)
        if any(not card.faceUp for card in run) or not tableau.isMovableRun(run):
            tableau.appendStack(run)
            return None
        return run

    # ---- dropping ---------------------------------------------------------

    def defaultTargets(self, state: GameState, origin: Pile) -> list:
        # tableaux before foundations
        groups = (state.tableaux, state.foundations)
        return [pile for group in groups for pile in group if pile is not origin]

    def drop(self, state: GameState, dest: Pile, run: Pile, origin: Pile) -> MoveResult:
        if dest is origin or run is None or run.isEmpty():
            return INVALID_MOVE
        if isinstance(dest, Foundation):
            if run.size() != 1:
                return INVALID_MOVE
            return dest.push(run.top())
        if isinstance(dest, Tableau):
            return dest.append(run)
        return INVALID_MOVE

    def afterMove(self, state: GameState, origin: Pile) -> list[GameEvent]:
        events = []
        self._reveal(state, origin, events)
        return events

    @staticmethod
    def _reveal(state: GameState, pile: Pile, events: list):
        if pile is None or pile is state.stock:
            return
        top = pile.top()
        if top is not None and not top.faceUp:
            top.faceUp = True
            events.append(RevealTop(state.nameOf(pile)))

    # ---- stock ------------------------------------------------------------

    def canRecycle(self, state: GameState) -> bool:
        return state.stockPasses is None or state.passes < state.stockPasses

    def deal(self, state: GameState) -> list[GameEvent]:
        stock, waste = state.stock, state.waste
        if not stock.isEmpty():
            count = min(state.drawCount, stock.size())
            for _ in range(count):
                stock.selectTop()
                card = stock.pop()
                card.faceUp = True
                waste.place(card)
            return [StockDeal(count)]
        if waste.isEmpty() or not self.canRecycle(state):
            return []
        turned = waste.reverseCopy()
        waste.clear()
        for card in turned:
            card.faceUp = False
        stock.appendStack(turned)
        state.passes += 1
        return [StockRecycle(stock.size(), state.passes)]

    # ---- removal (pairing games only) -------------------------------------

    def removableIndex(self, state: GameState, pile: Pile, probe=None) -> Optional[int]:
        return None

    def remove(self, state: GameState, picks: list) -> MoveResult:
        return INVALID_MOVE

    # ---- hints --------------------------------------------------------------

    def hint(self, state: GameState) -> list:
        return []

    # ---- end of game ------------------------------------------------------

    def isWon(self, state: GameState) -> bool:
        raise NotImplementedError

    def isLost(self, state: GameState) -> bool:
        return False

    @staticmethod
    def _foundationsStarted(state: GameState) -> bool:
        return all(not f.isEmpty() for f in state.foundations)

    @staticmethod
    def _tableauxSuitable(state: GameState, rule: TableauRule) -> bool:
        return all(Tableau.isSuitable(t, rule) for t in state.tableaux)


class AmericanToad(Variant):
    """
    Two decks. Twenty cards form a reserve, one card seeds the first
    foundation and sets the starting rank of all eight, and eight tableaux
    build down in suit, wrapping from ace to king. Only the top card or the
    whole of a tableau may be moved, and gaps are filled from the reserve.
    """
    name = AMERICAN_TOAD
    title = "American Toad"
    decks = 2
    deckSize = 104

    def layout(self, state, source, suitsUsed, config, rng):
        state.reserve = Pile()
        for _ in range(config.reserveSize):
            card = source.pop()
            card.faceUp = False
            state.reserve.place(card)
        if not state.reserve.isEmpty():
            state.reserve.top().faceUp = True

        base = source.pop()
        base.faceUp = True
        state.foundations = [Foundation(FoundationRule.SHARED_BASE, baseRank=base.rank) for _ in range(8)]
        state.foundations[0].place(base)

        state.tableaux = [Tableau(TableauRule.SAME_SUIT_WRAP) for _ in range(8)]
        for tableau in state.tableaux:
            _dealFaceUp(source, tableau, 1)
        _fillStock(state, source)

    def canLiftFrom(self, tableau, index):
        return index == 0 or index == tableau.size() - 1

    def drop(self, state, dest, run, origin):
        # Once the reserve runs dry a gap may not be filled from another tableau.
        if isinstance(dest, Tableau) and dest.isEmpty() and isinstance(origin, Tableau):
            return INVALID_MOVE
        if isinstance(dest, Tableau):
            if dest is origin or run is None or run.isEmpty():
                return INVALID_MOVE
            return dest.americanAppend(run)
        return super().drop(state, dest, run, origin)

    def afterMove(self, state, origin):
        events = super().afterMove(state, origin)
        reserve = state.reserve
        for i, tableau in enumerate(state.tableaux):
            if tableau.isEmpty() and not reserve.isEmpty():
                reserve.selectTop()
                card = reserve.pop()
                card.faceUp = True
                tableau.place(card)
                events.append(ReserveFill(f"t{i}"))
        self._reveal(state, reserve, events)
        return events

    def isWon(self, state):
        return (
            self._foundationsStarted(state)
            and self._tableauxSuitable(state, TableauRule.SAME_SUIT_WRAP)
            and state.stock.isEmpty()
            and state.waste.isEmpty()
            and state.reserve.isEmpty()
        )


class AnnoDomini(Variant):
    """
    One deck, four single-card tableaux building down in alternating colours
    (ace may go on king). Each foundation starts from a digit of the year:
    digit d takes rank d + 1, a zero digit also takes a jack, and each suit may
    start only one foundation.
    """
    name = ANNO_DOMINI
    title = "Anno Domini"

    def layout(self, state, source, suitsUsed, config, rng):
        state.tableaux = [Tableau(TableauRule.ALTERNATE_COLOR_WRAP) for _ in range(4)]
        for tableau in state.tableaux:
            _dealFaceUp(source, tableau, 1)
        state.foundations = [
            Foundation(FoundationRule.YEAR_DIGIT, digit=digit, suitsUsed=suitsUsed)
            for digit in yearDigits(config.currentYear())
        ]
        _fillStock(state, source)

    def isWon(self, state):
        nonEmpty = sum(1 for t in state.tableaux if not t.isEmpty())
        return (
            self._foundationsStarted(state)
            and self._tableauxSuitable(state, TableauRule.ALTERNATE_COLOR_WRAP)
            and nonEmpty <= 4
            and state.stock.isEmpty()
            and state.waste.isEmpty()
        )


class Argos(Variant):
    """
    Two decks without kings, plus one king per suit on each side. 52
    single-card tableaux form four rows of thirteen, the last column holding
    the kings. A tableau is paired off by a card of double its rank (less 13
    when over). Three complete rows win; running out of stock first loses.
    """
    name = ARGOS
    title = "Argos"
    decks = 2
    deckSize = 104
    ROWS = 4
    COLUMNS = 13
    ROWS_TO_WIN = 3

    def layout(self, state, source, suitsUsed, config, rng):
        others = [card for card in source if card.rank != KING]
        playKings, stockKings = [], []
        for suit in Card.SUITS:
            kings = [card for card in source if card.rank == KING and card.suit == suit]
            if len(kings) < 2:
                raise OutOfDeck(self.deckSize, len(source))
            playKings.append(kings[0])
            stockKings.append(kings[1])
        pairs = (self.ROWS * (self.COLUMNS - 1)) * 2
        if len(others) < pairs:
            raise OutOfDeck(self.deckSize, len(source))
        others = others[-pairs:]

        playCards, stockCards = [], []
        while others:
            stockCards.append(others.pop())
            playCards.append(others.pop())

        state.tableaux = [Tableau(TableauRule.DOUBLING) for _ in range(self.ROWS * self.COLUMNS)]
        for row in range(self.ROWS):
            king = playKings[row]
            king.faceUp = True
            state.tableaux[self.COLUMNS - 1 + row * self.COLUMNS].place(king)
            for col in range(self.COLUMNS - 1):
                _dealFaceUp(playCards, state.tableaux[col + row * self.COLUMNS], 1)

        stockCards.extend(stockKings)
        rng.shuffle(stockCards)
        _fillStock(state, stockCards)
        state.discard = Pile()
        self.deal(state)

    def pickupSources(self, state):
        return [state.waste]

    def canLiftFrom(self, tableau, index):
        return False

    def defaultTargets(self, state, origin):
        return [t for t in state.tableaux if t is not origin]

    def drop(self, state, dest, run, origin):
        if not isinstance(dest, Tableau):
            return INVALID_MOVE
        return super().drop(state, dest, run, origin)

    def deal(self, state):
        if state.stock.isEmpty():
            return []
        discarded = 0
        if not state.waste.isEmpty():
            state.waste.selectTop()
            state.discard.place(state.waste.pop())
            discarded = 1
        state.stock.selectTop()
        card = state.stock.pop()
        card.faceUp = True
        state.waste.place(card)
        return [StockDeal(1, discarded)]

    def afterMove(self, state, origin):
        events = super().afterMove(state, origin)
        if state.waste.isEmpty():
            events.extend(self.deal(state))
        return events

    def row(self, state, row: int) -> list:
        return state.tableaux[row * self.COLUMNS:(row + 1) * self.COLUMNS]

    def rowsComplete(self, state) -> int:
        return sum(1 for r in range(self.ROWS) if all(t.size() == 2 for t in self.row(state, r)))

    def placements(self, state, card: Card) -> list:
        return [t for t in state.tableaux if t.size() == 1 and followsDown(t.top(), card, TableauRule.DOUBLING)]

    def hint(self, state):
        if state.waste.isEmpty():
            return []
        return self.placements(state, state.waste.top())

    def isWon(self, state):
        return self.rowsComplete(state) >= self.ROWS_TO_WIN

    def isLost(self, state):
        if self.rowsComplete(state) >= self.ROWS_TO_WIN or not state.stock.isEmpty():
            return False
        if state.waste.isEmpty():
            return True
        return len(self.placements(state, state.waste.top())) == 0


class AztecPyramid(Variant):
    """
    Six four-card tableaux and a seven-row pyramid. Exposed pyramid cards and
    tableau tops are removed in pairs totalling 13, kings on their own. The
    game is won when the pyramid is cleared.
    """
    name = AZTEC_PYRAMID
    title = "Aztec Pyramid"
    usesRemoval = True
    TABLEAUX = 6
    TABLEAU_DEPTH = 4

    def requiredCards(self, config):
        rows = config.pyramidRows
        return self.TABLEAUX * self.TABLEAU_DEPTH + rows * (rows + 1) // 2

    def layout(self, state, source, suitsUsed, config, rng):
        state.tableaux = [Tableau(TableauRule.ALTERNATE_COLOR) for _ in range(self.TABLEAUX)]
        for tableau in state.tableaux:
            _dealFaceUp(source, tableau, self.TABLEAU_DEPTH)
        pyramid = Pyramid(config.pyramidRows)
        while len(pyramid.slots) < pyramid.capacity:
            _dealFaceUp(source, pyramid, 1)
        state.pyramid = pyramid
        _fillStock(state, source)

    def pickupSources(self, state):
        return []

    def defaultTargets(self, state, origin):
        return []

    def removableIndex(self, state, pile, probe=None):
        if pile is state.pyramid:
            if not isinstance(probe, tuple) or len(probe) != 2:
                return None
            row, col = probe
            if pile.getCard(row, col) is None:
                return None
            return Pyramid.slotOf(row, col)
        if any(pile is t for t in state.tableaux) and not pile.isEmpty():
            top = pile.size() - 1
            if probe is None or probe == top or probe == -1:
                return top
        return None

    def remove(self, state, picks):
        cards = []
        for pile, index in picks:
            if isinstance(pile, Pyramid):
                if not pile.reachable(index):
                    return INVALID_MOVE
                cards.append(pile.slots[index])
            elif index == pile.size() - 1 and index >= 0:
                cards.append(pile[index])
            else:
                return INVALID_MOVE
        if len(picks) == 1:
            allowed = canRemoveAlone(cards[0])
        elif len(picks) == 2:
            distinct = not (picks[0][0] is picks[1][0] and picks[0][1] == picks[1][1])
            allowed = distinct and canRemovePair(cards[0], cards[1])
        else:
            allowed = False
        if not allowed:
            return INVALID_MOVE
        for pile, index in picks:
            pile.selectIndex(index)
            card = pile.pop()
            card.highlighted = False
        return MoveResult.ACCEPTED

    def isWon(self, state):
        return state.pyramid is not None and state.pyramid.isEmpty()


VARIANTS = {
    variant.name: variant
    for variant in (AmericanToad(), AnnoDomini(), Argos(), AztecPyramid())
}


def getVariant(name) -> Variant:
    if isinstance(name, Variant):
        return name
    key = str(name).strip().lower().replace(" ", "_").replace("-", "_")
    if key == "aztec_pyramids":
        key = AZTEC_PYRAMID
    if key not in VARIANTS:
        raise UnknownVariant(name)
    return VARIANTS[key]


def newGame(variant, shuffledDeck, suitsUsed: SuitRegistry = None, config: GameConfig = None, rng=None) -> GameState:
    return getVariant(variant).newGame(shuffledDeck, suitsUsed, config, rng)
