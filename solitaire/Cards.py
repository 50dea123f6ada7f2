import random

CLUBS = 0
DIAMONDS = 1
HEARTS = 2
SPADES = 3

ACE = 1
JACK = 11
QUEEN = 12
KING = 13


class Card:
    """
    A playing card. Suit and rank never change; ``faceUp`` and ``highlighted``
    are flipped in place by the piles that hold the card.
    """
    NUM_PER_SUIT = 13
    SUITS = (CLUBS, DIAMONDS, HEARTS, SPADES)
    SUIT_NAMES = ("Clubs", "Diamonds", "Hearts", "Spades")
    SUIT_SYMBOLS = "♣♦♥♠"
    RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

    __slots__ = ("_suit", "_rank", "faceUp", "highlighted")

    def __init__(self, suit: int, rank: int, faceUp=True):
        if suit not in Card.SUITS:
            raise ValueError(f"bad suit: {suit!r}")
        if not ACE <= rank <= KING:
            raise ValueError(f"bad rank: {rank!r}")
        self._suit = suit
        self._rank = rank
        self.faceUp = faceUp
        self.highlighted = False

    @property
    def suit(self) -> int:
        return self._suit

    @property
    def rank(self) -> int:
        return self._rank

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return self._suit == other._suit and self._rank == other._rank

    def __hash__(self):
        return hash((self._suit, self._rank))

    def __str__(self):
        return Card.RANKS[self._rank - 1] + Card.SUIT_SYMBOLS[self._suit]

    def __repr__(self):
        return f"Card({Card.SUIT_NAMES[self._suit]}, {self._rank})"

    def gameStr(self):
        if not self.faceUp:
            return "---"
        text = str(self)
        if self.highlighted:
            return "*" + text
        return text

    def color(self):
        if self._suit in (DIAMONDS, HEARTS):
            return "red"
        return "black"

    def isRed(self):
        return self.color() == "red"

    def suitName(self):
        return Card.SUIT_NAMES[self._suit]

    @staticmethod
    def parse(text: str) -> "Card":
        """Parse ``"10H"``, ``"qs"`` or ``"A♣"`` style names."""
        token = text.strip().upper()
        if len(token) < 2:
            raise ValueError(f"bad card: {text!r}")
        rankText, suitText = token[:-1], token[-1]
        letters = "CDHS"
        if suitText in letters:
            suit = letters.index(suitText)
        elif suitText in Card.SUIT_SYMBOLS:
            suit = Card.SUIT_SYMBOLS.index(suitText)
        else:
            raise ValueError(f"bad suit in card: {text!r}")
        if rankText not in Card.RANKS:
            raise ValueError(f"bad rank in card: {text!r}")
        return Card(suit, Card.RANKS.index(rankText) + 1)


def sameColor(a: Card, b: Card) -> bool:
    return a.color() == b.color()


def newDeck(decks=1, ranks=range(ACE, KING + 1), faceUp=True):
    """Ordered cards by suit then rank, ``decks`` copies of each."""
    lst = []
    for _ in range(decks):
        for suit in Card.SUITS:
            for rank in ranks:
                lst.append(Card(suit, rank, faceUp))
    return lst


def shuffledDeck(decks=1, rng: random.Random = None, ranks=range(ACE, KING + 1)):
    lst = newDeck(decks, ranks)
    (rng or random).shuffle(lst)
    return lst
