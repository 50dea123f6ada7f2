class SolitaireError(Exception):
    pass


class OutOfDeck(SolitaireError):
    """Raised when a deck is too small for a variant's layout."""

    def __init__(self, needed: int, available: int):
        super().__init__(f"layout needs {needed} cards, deck has {available}")
        self.needed = needed
        self.available = available


class UnknownVariant(SolitaireError):
    def __init__(self, name):
        super().__init__(f"unknown variant: {name!r}")
        self.name = name


class HandStateError(SolitaireError):
    """A pick-up or drop was requested in the wrong hand state."""
