from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Optional

from solitaire.Errors import HandStateError
from solitaire.Interface import Interface
from solitaire.Events import CardMove, CardSelected, CardsRemoved, GameEvent, RunReturned
from solitaire.Piles import ACCEPTED, INVALID_MOVE, MoveResult, Pile, SuitRegistry, canRemoveAlone
from solitaire.Variants import GameConfig, GameState, Variant, getVariant

logger = logging.getLogger(__name__)


class HandState(Enum):
    IDLE = "idle"
    HOLDING = "holding"
    RESOLVED = "resolved"
    RETURNED = "returned"


class Core:
    """
    ask*** : should be called by "player", one complete action each.
    attempt*** : the two halves of a move; a lifted run is held until dropped.
    """
    DEFAULT_CONFIG = GameConfig()

    def __init__(self, interface=None):
        self.interface = None
        self.config: GameConfig = None
        self.variant: Variant = None
        self.state: GameState = None
        # one registry per session, cleared by every new game
        self.suitsUsed = SuitRegistry()

        self.hand = Pile()
        self.origin: Optional[Pile] = None
        self.handState = HandState.IDLE
        self.lastOutcome: Optional[HandState] = None
        self.pending = None  # (pile, index) waiting for a partner card
        self.hints: tuple[str, ...] = ()

        self.moves = 0
        self.gameEnded = False
        self.won = False
        if interface is not None:
            self.registerInterface(interface)

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    def startGame(self, gameConfig: GameConfig = DEFAULT_CONFIG, deck=None) -> GameState:
        if self.interface is None:
            self.registerInterface(Interface())
        variant = getVariant(gameConfig.variant)
        rng = random.Random(gameConfig.seed)
        self.suitsUsed.resetForNewGame()
        if deck is None:
            deck = variant.buildDeck(rng)
        self.state = variant.newGame(deck, self.suitsUsed, gameConfig, rng)
        self.variant = variant
        self.config = gameConfig

        self.hand = Pile()
        self.origin = None
        self.handState = HandState.IDLE
        self.lastOutcome = None
        self.pending = None
        self.hints = ()
        self.moves = 0
        self.gameEnded = False
        self.won = False
        logger.info("new game: %s (seed=%s)", variant.title, gameConfig.seed)
        self.interface.onStart()
        return self.state

    def _emit(self, event: GameEvent):
        self.interface.onEvent(event)

    # ---- hand state machine -------------------------------------------------

    def attemptPickup(self, pile: Pile, probe=None) -> Optional[Pile]:
        if self.handState is HandState.HOLDING:
            raise HandStateError("already holding a run")
        run = self.variant.pickupRun(self.state, pile, probe)
        if run is None:
            return None
        self.hand = run
        self.origin = pile
        self.handState = HandState.HOLDING
        return run

    def attemptDrop(self, candidates=None) -> Optional[Pile]:
        """
        Offer the held run to each candidate in turn and keep the first that
        accepts. Returns that pile, or None after putting the run back.
        """
        if self.handState is not HandState.HOLDING:
            raise HandStateError("nothing in hand")
        state, run, origin = self.state, self.hand, self.origin
        if candidates is None:
            candidates = self.variant.defaultTargets(state, origin)
        for dest in candidates:
            if self.variant.drop(state, dest, run, origin):
                self._release(HandState.RESOLVED)
                self.hints = ()
                self.moves += 1
                self._emit(CardMove(state.nameOf(origin), state.nameOf(dest), run.size()))
                for event in self.variant.afterMove(state, origin):
                    self._emit(event)
                self.checkEnd()
                return dest
        origin.appendStack(run)
        logger.debug("no destination for %s, returned to %s", run, state.nameOf(origin))
        self._release(HandState.RETURNED)
        self._emit(RunReturned(state.nameOf(origin), run.size()))
        return None

    def _release(self, outcome: HandState):
        self.lastOutcome = outcome
        self.hand = Pile()
        self.origin = None
        self.handState = HandState.IDLE

    def isHolding(self) -> bool:
        return self.handState is HandState.HOLDING

    # ---- player actions ----------------------------------------------------

    def askMove(self, src: Pile, probe, dest: Pile) -> MoveResult:
        if self.attemptPickup(src, probe) is None:
            return INVALID_MOVE
        if self.attemptDrop([dest]) is None:
            return INVALID_MOVE
        return ACCEPTED

    def askAutoMove(self, src: Pile, probe=None) -> MoveResult:
        if self.attemptPickup(src, probe) is None:
            return INVALID_MOVE
        if self.attemptDrop() is None:
            return INVALID_MOVE
        return ACCEPTED

    def askDeal(self) -> bool:
        if self.handState is HandState.HOLDING:
            raise HandStateError("cannot deal while holding a run")
        events = self.variant.deal(self.state)
        if not events:
            return False
        self.hints = ()
        self.moves += 1
        for event in events:
            self._emit(event)
        self.checkEnd()
        return True

    def askRemove(self, pile: Pile, probe=None) -> MoveResult:
        """
        Select a card for removal. A king goes at once; any other card waits
        for a partner that brings the pair to 13. Choosing the waiting card
        again cancels it. When the pair does not add up, the card just chosen
        becomes the waiting one and INVALID_MOVE is returned.
        """
        if not self.variant.usesRemoval:
            return INVALID_MOVE
        state = self.state
        index = self.variant.removableIndex(state, pile, probe)
        if index is None:
            return INVALID_MOVE
        card = pile.slots[index] if pile is state.pyramid else pile[index]

        if self.pending is None:
            if canRemoveAlone(card):
                return self._remove([(pile, index)])
            self._select(pile, index, card)
            return ACCEPTED

        first = self.pending
        self._clearPending()
        if first[0] is pile and first[1] == index:
            return ACCEPTED
        if self._remove([first, (pile, index)]):
            return ACCEPTED
        if canRemoveAlone(card):
            return self._remove([(pile, index)])
        self._select(pile, index, card)
        return INVALID_MOVE

    def _select(self, pile: Pile, index: int, card):
        self.pending = (pile, index)
        card.highlighted = True
        self._emit(CardSelected(self.state.nameOf(pile), card))

    def _clearPending(self):
        if self.pending is None:
            return
        pile, index = self.pending
        card = pile.slots[index] if pile is self.state.pyramid else pile[index]
        card.highlighted = False
        self.pending = None

    def _remove(self, picks) -> MoveResult:
        state = self.state
        names = tuple(state.nameOf(pile) for pile, _ in picks)
        cards = tuple(pile.slots[i] if pile is state.pyramid else pile[i] for pile, i in picks)
        if not self.variant.remove(state, picks):
            logger.debug("cannot remove %s", ", ".join(str(c) for c in cards))
            return INVALID_MOVE
        self.moves += 1
        self._emit(CardsRemoved(names, cards))
        for pile, _ in picks:
            for event in self.variant.afterMove(state, pile):
                self._emit(event)
        self.checkEnd()
        return ACCEPTED

    def askHint(self) -> tuple[str, ...]:
        """Names of the piles the current card could go to; kept until the next deal or move."""
        if self.state is None:
            return ()
        self.hints = tuple(self.state.nameOf(pile) for pile in self.variant.hint(self.state))
        return self.hints

    # ---- end of game -------------------------------------------------------

    def isWon(self) -> bool:
        return self.state is not None and self.variant.isWon(self.state)

    def isLost(self) -> bool:
        return self.state is not None and self.variant.isLost(self.state)

    def checkEnd(self) -> bool:
        if self.gameEnded or self.handState is HandState.HOLDING:
            return self.gameEnded
        if self.isWon():
            self.gameEnded = True
            self.won = True
            logger.info("won %s after %d moves", self.variant.title, self.moves)
            self.interface.onWin()
        elif self.isLost():
            self.gameEnded = True
            logger.info("lost %s after %d moves", self.variant.title, self.moves)
            self.interface.onLoss()
        return self.gameEnded
