class GameEvent:
    """Something the core did that an interface may want to show."""

    def isAuto(self) -> bool:
        return False

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{type(self).__name__}({fields})"


class CardMove(GameEvent):
    def __init__(self, src: str, dest: str, count: int):
        self.src = src
        self.dest = dest
        self.count = count


class RunReturned(GameEvent):
    def __init__(self, origin: str, count: int):
        self.origin = origin
        self.count = count


class RevealTop(GameEvent):
    def __init__(self, pile: str):
        self.pile = pile

    def isAuto(self):
        return True


class StockDeal(GameEvent):
    def __init__(self, drawCount: int, discarded: int = 0):
        self.drawCount = drawCount
        self.discarded = discarded


class StockRecycle(GameEvent):
    def __init__(self, count: int, passes: int):
        self.count = count
        self.passes = passes


class ReserveFill(GameEvent):
    def __init__(self, tableau: str):
        self.tableau = tableau

    def isAuto(self):
        return True


class CardSelected(GameEvent):
    def __init__(self, pile: str, card):
        self.pile = pile
        self.card = card


class CardsRemoved(GameEvent):
    def __init__(self, piles: tuple, cards: tuple):
        self.piles = piles
        self.cards = cards
