from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from solitaire.Cards import ACE, JACK, KING, Card, sameColor


class MoveResult(Enum):
    """Outcome of a guarded push or append. Rejection is a normal outcome."""
    ACCEPTED = "accepted"
    INVALID_MOVE = "invalid_move"

    def __bool__(self):
        return self is MoveResult.ACCEPTED


ACCEPTED = MoveResult.ACCEPTED
INVALID_MOVE = MoveResult.INVALID_MOVE


class Pile:
    """
    An ordered stack of cards, bottom first.

    ``pop`` and ``peek`` act on the selected card instead of blindly on the top:
    pushing selects the pushed card, and ``select``/``selectIndex`` move the
    selection. When nothing is selected both return None.
    """

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards: list[Card] = []
        self._selected: Optional[int] = None
        for card in cards:
            self.place(card)

    # ---- acceptance -------------------------------------------------------

    def accepts(self, card: Card) -> bool:
        return True

    def push(self, card: Card) -> MoveResult:
        if not self.accepts(card):
            return INVALID_MOVE
        self.place(card)
        return ACCEPTED

    def place(self, card: Card):
        """Put ``card`` on top without consulting the acceptance rule."""
        self._cards.append(card)
        self._selected = len(self._cards) - 1

    # ---- selection --------------------------------------------------------

    def reachable(self, index: int) -> bool:
        return 0 <= index < len(self._cards)

    def select(self, card: Card) -> bool:
        """Select the topmost reachable card equal in value to ``card``."""
        if card is None:
            return False
        for index in range(len(self._cards) - 1, -1, -1):
            if self._cards[index] == card and self.reachable(index):
                self._selected = index
                return True
        return False

    def selectIndex(self, index: int) -> bool:
        if index < 0:
            index += len(self._cards)
        if not self.reachable(index):
            return False
        self._selected = index
        return True

    def selectTop(self) -> bool:
        return self.selectIndex(len(self._cards) - 1)

    def selectedIndex(self) -> Optional[int]:
        return self._selected

    def pop(self) -> Optional[Card]:
        if self._selected is None or self.isEmpty():
            return None
        card = self._cards.pop(self._selected)
        self._afterPop()
        return card

    def _afterPop(self):
        self._selected = len(self._cards) - 1 if self._cards else None

    def peek(self) -> Optional[Card]:
        if self._selected is None or self.isEmpty():
            return None
        return self._cards[self._selected]

    # ---- plain stack queries ---------------------------------------------

    def top(self) -> Optional[Card]:
        return self._cards[-1] if self._cards else None

    def bottom(self) -> Optional[Card]:
        return self._cards[0] if self._cards else None

    def isEmpty(self) -> bool:
        return len(self._cards) == 0

    def size(self) -> int:
        return len(self._cards)

    def clear(self):
        self._cards = []
        self._selected = None

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self):
        return len(self._cards)

    def __iter__(self):
        return iter(tuple(self._cards))

    def __getitem__(self, index):
        return self._cards[index]

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(str(c) for c in self._cards)})"

    # ---- bulk operations --------------------------------------------------

    def reverse(self):
        self._cards.reverse()
        if self._cards:
            self._selected = len(self._cards) - 1

    def copy(self) -> Pile:
        """Shallow snapshot: a plain Pile sharing the same card objects."""
        return Pile(self.cards)

    def reverseCopy(self) -> Pile:
        return Pile(reversed(self.cards))

    def appendStack(self, other: Pile):
        """Place every card of ``other`` on top, keeping its order. ``other`` is left as it was."""
        if other is None or other.isEmpty():
            return
        temp = other.reverseCopy()
        while not temp.isEmpty():
            self.place(temp.pop())

    def popFrom(self, index: int) -> Pile:
        """Remove and return the run from ``index`` to the top."""
        if index < 0:
            index += len(self._cards)
        index = max(0, index)
        run = Pile(self._cards[index:])
        del self._cards[index:]
        self._afterPop()
        return run


# ---------------------------------------------------------------------------
# Foundations
# ---------------------------------------------------------------------------

class FoundationRule(Enum):
    STANDARD = "standard"
    SHARED_BASE = "shared_base"
    YEAR_DIGIT = "year_digit"


class SuitRegistry:
    """Suits that have started a year-digit foundation in the current game."""

    def __init__(self):
        self._used: set[int] = set()

    def resetForNewGame(self):
        self._used.clear()

    def isUsed(self, suit: int) -> bool:
        return suit in self._used

    def mark(self, suit: int):
        self._used.add(suit)

    def __contains__(self, suit):
        return suit in self._used

    def __len__(self):
        return len(self._used)


def yearDigits(year: int) -> tuple[int, int, int, int]:
    text = f"{int(year):04d}"
    if len(text) != 4:
        raise ValueError(f"year must have four digits: {year!r}")
    return tuple(int(ch) for ch in text)


class Foundation(Pile):
    """A pile built up in suit from a rule-defined starting rank."""

    def __init__(self, rule=FoundationRule.STANDARD, baseRank=ACE, digit=None, suitsUsed: SuitRegistry = None):
        super().__init__()
        if rule is FoundationRule.YEAR_DIGIT:
            if digit is None or not 0 <= digit <= 9:
                raise ValueError("year-digit foundation needs a digit in 0..9")
            if suitsUsed is None:
                raise ValueError("year-digit foundation needs a suit registry")
        if not ACE <= baseRank <= KING:
            raise ValueError(f"bad base rank: {baseRank!r}")
        self.rule = rule
        self.baseRank = baseRank
        self.digit = digit
        self.suitsUsed = suitsUsed

    def startRanks(self) -> tuple[int, ...]:
        if self.rule is FoundationRule.STANDARD:
            return (ACE,)
        if self.rule is FoundationRule.SHARED_BASE:
            return (self.baseRank,)
        if self.digit == 0:
            return (self.digit + 1, JACK)
        return (self.digit + 1,)

    def accepts(self, card: Card) -> bool:
        top = self.top()
        if top is None:
            if card.rank not in self.startRanks():
                return False
            if self.rule is FoundationRule.YEAR_DIGIT:
                return not self.suitsUsed.isUsed(card.suit)
            return True
        if card.suit != top.suit:
            return False
        if card.rank == top.rank + 1:
            return True
        return self.rule is FoundationRule.YEAR_DIGIT and card.rank == ACE and top.rank == KING

    def push(self, card: Card) -> MoveResult:
        starting = self.isEmpty()
        result = super().push(card)
        if result and starting and self.rule is FoundationRule.YEAR_DIGIT:
            self.suitsUsed.mark(card.suit)
        return result


# ---------------------------------------------------------------------------
# Tableaux
# ---------------------------------------------------------------------------

class TableauRule(Enum):
    ALTERNATE_COLOR = "alternate_color"
    ALTERNATE_COLOR_WRAP = "alternate_color_wrap"
    SAME_SUIT_WRAP = "same_suit_wrap"
    DOUBLING = "doubling"


def _stepDown(lower: Card, upper: Card, wrap: bool) -> bool:
    if upper.rank == lower.rank - 1:
        return True
    return wrap and upper.rank == KING and lower.rank == ACE


def followsDown(lower: Card, upper: Card, rule: TableauRule) -> bool:
    """Whether ``upper`` may sit directly on ``lower`` in a tableau built by ``rule``."""
    if rule is TableauRule.ALTERNATE_COLOR:
        return _stepDown(lower, upper, False) and not sameColor(lower, upper)
    if rule is TableauRule.ALTERNATE_COLOR_WRAP:
        return _stepDown(lower, upper, True) and not sameColor(lower, upper)
    if rule is TableauRule.SAME_SUIT_WRAP:
        return _stepDown(lower, upper, True) and lower.suit == upper.suit
    if rule is TableauRule.DOUBLING:
        return upper.rank in (2 * lower.rank, 2 * lower.rank - 13)
    raise ValueError(f"unknown tableau rule: {rule!r}")


class Tableau(Pile):
    """A pile built downward; which cards may follow is set by its rule."""

    def __init__(self, rule=TableauRule.ALTERNATE_COLOR, cards: Iterable[Card] = ()):
        super().__init__(cards)
        self.rule = rule

    def _acceptsRun(self, run: Pile, rule: TableauRule) -> bool:
        if run is None or run.isEmpty():
            return False
        top = self.top()
        if rule is TableauRule.DOUBLING:
            return run.size() == 1 and self.size() == 1 and followsDown(top, run.bottom(), rule)
        if top is None:
            return True
        return followsDown(top, run.bottom(), rule)

    def accepts(self, card: Card) -> bool:
        return self._acceptsRun(Pile((card,)), self.rule)

    def append(self, run: Pile) -> MoveResult:
        if not self._acceptsRun(run, self.rule):
            return INVALID_MOVE
        self.appendStack(run)
        return ACCEPTED

    def americanAppend(self, run: Pile) -> MoveResult:
        if not self._acceptsRun(run, TableauRule.SAME_SUIT_WRAP):
            return INVALID_MOVE
        self.appendStack(run)
        return ACCEPTED

    def popCardsFrom(self, index: int) -> Pile:
        return self.popFrom(index)

    def isMovableRun(self, run: Pile) -> bool:
        return Tableau.isSuitable(run, self.rule)

    @staticmethod
    def isSuitable(pile: Pile, rule=TableauRule.ALTERNATE_COLOR) -> bool:
        cards = pile.cards
        for i in range(1, len(cards)):
            if not followsDown(cards[i - 1], cards[i], rule):
                return False
        return True


# ---------------------------------------------------------------------------
# Pyramid
# ---------------------------------------------------------------------------

def canRemoveAlone(card: Card) -> bool:
    return card is not None and card.rank == KING


def canRemovePair(a: Card, b: Card) -> bool:
    return a is not None and b is not None and a.rank + b.rank == 13


class Pyramid(Pile):
    """
    Cards laid out in a triangle, dealt row by row from the apex.

    Slot ``(row, col)`` rests on ``(row + 1, col)`` and ``(row + 1, col + 1)``;
    only a card with both of those slots empty is exposed. Removing a card
    leaves a hole, so positions never shift.
    """

    def __init__(self, rows=7):
        super().__init__()
        if rows < 1:
            raise ValueError("a pyramid needs at least one row")
        self.rows = rows
        self._slots: list[Optional[Card]] = []
        self._count = 0

    @property
    def capacity(self) -> int:
        return self.rows * (self.rows + 1) // 2

    @staticmethod
    def slotOf(row: int, col: int) -> int:
        return row * (row + 1) // 2 + col

    @staticmethod
    def positionOf(index: int) -> tuple[int, int]:
        row = 0
        while index > row:
            row += 1
            index -= row
        return row, index

    def children(self, index: int) -> tuple[int, int]:
        row, col = Pyramid.positionOf(index)
        return Pyramid.slotOf(row + 1, col), Pyramid.slotOf(row + 1, col + 1)

    def _occupied(self, index: int) -> bool:
        return index < len(self._slots) and self._slots[index] is not None

    def isExposed(self, index: int) -> bool:
        if not self._occupied(index):
            return False
        left, right = self.children(index)
        return not self._occupied(left) and not self._occupied(right)

    def reachable(self, index: int) -> bool:
        return self.isExposed(index)

    def exposedCards(self) -> list[Card]:
        return [self._slots[i] for i in range(len(self._slots)) if self.isExposed(i)]

    def exposedSlots(self) -> list[int]:
        return [i for i in range(len(self._slots)) if self.isExposed(i)]

    # ---- Pile protocol over the slot array ------------------------------

    def accepts(self, card: Card) -> bool:
        return len(self._slots) < self.capacity

    def place(self, card: Card):
        if len(self._slots) >= self.capacity:
            raise ValueError("pyramid is full")
        self._slots.append(card)
        self._count += 1
        self._selected = len(self._slots) - 1

    def select(self, card: Card) -> bool:
        if card is None:
            return False
        for index in range(len(self._slots) - 1, -1, -1):
            if self._slots[index] == card and self.isExposed(index):
                self._selected = index
                return True
        return False

    def selectIndex(self, index: int) -> bool:
        if not self.isExposed(index):
            return False
        self._selected = index
        return True

    def selectCard(self, row: int, col: int) -> bool:
        if not self._validPosition(row, col):
            return False
        return self.selectIndex(Pyramid.slotOf(row, col))

    def getCard(self, row: int, col: int) -> Optional[Card]:
        if not self._validPosition(row, col):
            return None
        index = Pyramid.slotOf(row, col)
        if self.isExposed(index):
            return self._slots[index]
        return None

    def slotCard(self, row: int, col: int) -> Optional[Card]:
        """The card at a position, covered or not."""
        if not self._validPosition(row, col):
            return None
        index = Pyramid.slotOf(row, col)
        return self._slots[index] if index < len(self._slots) else None

    def _validPosition(self, row, col):
        return 0 <= row < self.rows and 0 <= col <= row

    def pop(self) -> Optional[Card]:
        card = self.peek()
        if card is None:
            return None
        self._slots[self._selected] = None
        self._count -= 1
        self._selected = None
        return card

    def peek(self) -> Optional[Card]:
        if self._selected is None or not self._occupied(self._selected):
            return None
        return self._slots[self._selected]

    def top(self) -> Optional[Card]:
        return self.peek()

    def bottom(self) -> Optional[Card]:
        return self._slots[0] if self._slots else None

    def isEmpty(self) -> bool:
        return self.size() == 0

    def size(self) -> int:
        return self._count

    def clear(self):
        self._slots = []
        self._count = 0
        self._selected = None

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(card for card in self._slots if card is not None)

    @property
    def slots(self) -> tuple[Optional[Card], ...]:
        return tuple(self._slots)

    def __len__(self):
        return self.size()

    def __iter__(self):
        return iter(self.cards)

    def __getitem__(self, index):
        return self.cards[index]

    def reverse(self):
        raise TypeError("a pyramid cannot be reversed")

    def popFrom(self, index: int) -> Pile:
        raise TypeError("a pyramid has no runs")
