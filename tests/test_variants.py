import random
import unittest

from solitaire.Cards import KING, Card, newDeck
from solitaire.Errors import OutOfDeck, UnknownVariant
from solitaire.Piles import Foundation, Pile, Pyramid, SuitRegistry, Tableau, followsDown, TableauRule
from solitaire.Variants import (
    AMERICAN_TOAD,
    ANNO_DOMINI,
    ARGOS,
    AZTEC_PYRAMID,
    AmericanToad,
    AnnoDomini,
    Argos,
    AztecPyramid,
    GameConfig,
    GameState,
    getVariant,
    newGame,
)


def shuffled(decks=1, seed=3):
    deck = newDeck(decks)
    random.Random(seed).shuffle(deck)
    return deck


class RegistryTestCase(unittest.TestCase):
    def test_lookup(self):
        self.assertIsInstance(getVariant(ARGOS), Argos)
        self.assertIsInstance(getVariant("Aztec Pyramid"), AztecPyramid)
        self.assertIsInstance(getVariant("american-toad"), AmericanToad)
        with self.assertRaises(UnknownVariant):
            getVariant("klondike")

    def test_short_deck_raises(self):
        with self.assertRaises(OutOfDeck):
            newGame(ANNO_DOMINI, newDeck()[:51])
        with self.assertRaises(OutOfDeck):
            newGame(AMERICAN_TOAD, newDeck())
        with self.assertRaises(OutOfDeck):
            newGame(AZTEC_PYRAMID, newDeck(), config=GameConfig(AZTEC_PYRAMID, pyramidRows=8))


class AmericanToadTestCase(unittest.TestCase):
    def setUp(self):
        self.variant = AmericanToad()
        self.state = self.variant.newGame(shuffled(2), SuitRegistry())

    def test_layout(self):
        state = self.state
        self.assertEqual(20, state.reserve.size())
        self.assertTrue(state.reserve.top().faceUp)
        self.assertFalse(any(c.faceUp for c in state.reserve.cards[:-1]))
        self.assertEqual(8, len(state.foundations))
        self.assertEqual(1, state.foundations[0].size())
        base = state.foundations[0].top().rank
        self.assertTrue(all(f.baseRank == base for f in state.foundations))
        self.assertEqual([1] * 8, [t.size() for t in state.tableaux])
        self.assertEqual(75, state.stock.size())
        self.assertEqual(104, state.cardCount())

    def test_only_top_or_whole_pile_lifts(self):
        tableau = self.state.tableaux[0]
        tableau.clear()
        for rank in (9, 8, 7):
            tableau.place(Card(0, rank))
        self.assertIsNone(self.variant.pickupRun(self.state, tableau, 1))
        self.assertEqual(3, tableau.size())
        run = self.variant.pickupRun(self.state, tableau, 0)
        self.assertEqual(3, run.size())
        self.assertTrue(tableau.isEmpty())

    def test_gap_not_filled_from_tableau(self):
        state = self.state
        state.reserve.clear()
        gap, other = state.tableaux[1], state.tableaux[0]
        gap.clear()
        run = Pile((other.top(),))
        self.assertFalse(self.variant.drop(state, gap, run, other))
        self.assertTrue(self.variant.drop(state, gap, run, state.waste))

    def test_win(self):
        state = GameState(AMERICAN_TOAD, reserve=Pile())
        state.foundations = [Foundation() for _ in range(8)]
        for f in state.foundations:
            f.place(Card(0, 1))
        state.tableaux = [Tableau(TableauRule.SAME_SUIT_WRAP, [Card(1, 1), Card(1, KING)])]
        self.assertTrue(self.variant.isWon(state))
        state.reserve.place(Card(2, 2))
        self.assertFalse(self.variant.isWon(state))
        self.assertFalse(self.variant.isLost(state))


class AnnoDominiTestCase(unittest.TestCase):
    def setUp(self):
        self.variant = AnnoDomini()

    def test_layout_uses_year_digits(self):
        state = self.variant.newGame(shuffled(), SuitRegistry(), GameConfig(ANNO_DOMINI, year=2024))
        self.assertEqual([2, 0, 2, 4], [f.digit for f in state.foundations])
        self.assertEqual([1, 1, 1, 1], [t.size() for t in state.tableaux])
        self.assertEqual(48, state.stock.size())
        self.assertFalse(any(c.faceUp for c in state.stock))
        self.assertTrue(all(t.top().faceUp for t in state.tableaux))

    def test_registry_is_shared_by_foundations(self):
        used = SuitRegistry()
        state = self.variant.newGame(shuffled(), used, GameConfig(ANNO_DOMINI, year=2022))
        self.assertTrue(state.foundations[0].push(Card(1, 3)))
        self.assertFalse(state.foundations[2].push(Card(1, 3)))
        self.assertTrue(used.isUsed(1))

    def test_win(self):
        state = GameState(ANNO_DOMINI)
        state.foundations = [Foundation() for _ in range(4)]
        self.assertFalse(self.variant.isWon(state))
        for f in state.foundations:
            f.place(Card(0, 1))
        state.tableaux = [Tableau(TableauRule.ALTERNATE_COLOR_WRAP, [Card(0, 1), Card(1, KING)])]
        self.assertTrue(self.variant.isWon(state))
        state.stock.place(Card(3, 3))
        self.assertFalse(self.variant.isWon(state))


    def test_tableau_ignores_pyramid_position(self):
        state = self.variant.newGame(shuffled(), SuitRegistry(), GameConfig(ANNO_DOMINI, year=2024))
        tableau = state.tableaux[0]
        before = list(tableau)
        self.assertIsNone(self.variant.pickupRun(state, tableau, (1, 2)))
        self.assertEqual(before, list(tableau))
        self.assertEqual([], self.variant.hint(state))


class ArgosTestCase(unittest.TestCase):
    def setUp(self):
        self.variant = Argos()
        self.state = self.variant.newGame(shuffled(2), SuitRegistry(), rng=random.Random(5))

    def test_layout(self):
        state = self.state
        self.assertEqual(52, len(state.tableaux))
        self.assertTrue(all(t.size() == 1 for t in state.tableaux))
        for row in range(4):
            column = [t.top() for t in self.variant.row(state, row)]
            self.assertEqual(KING, column[12].rank)
            self.assertTrue(all(c.rank != KING for c in column[:12]))
        kings = sorted(state.tableaux[12 + 13 * r].top().suit for r in range(4))
        self.assertEqual([0, 1, 2, 3], kings)
        self.assertEqual(1, state.waste.size())
        self.assertEqual(51, state.stock.size())
        self.assertEqual(4, sum(1 for c in list(state.stock) + list(state.waste) if c.rank == KING))
        self.assertEqual(104, state.cardCount())

    def test_hint_names_doubling_places(self):
        state = self.state
        state.waste.clear()
        self.assertEqual([], self.variant.hint(state))
        lower = state.tableaux[0].top()
        state.waste.place(Card(0, 2 * lower.rank if 2 * lower.rank <= 13 else 2 * lower.rank - 13))
        places = self.variant.hint(state)
        self.assertTrue(any(t is state.tableaux[0] for t in places))
        self.assertTrue(all(t.size() == 1 for t in places))

    def test_tableaux_never_lift(self):
        self.assertIsNone(self.variant.pickupRun(self.state, self.state.tableaux[0]))
        self.assertIsNotNone(self.variant.pickupRun(self.state, self.state.waste))

    def test_deal_discards_waste(self):
        state = self.state
        events = self.variant.deal(state)
        self.assertEqual(1, events[0].discarded)
        self.assertEqual(1, state.discard.size())
        self.assertEqual(1, state.waste.size())
        self.assertEqual(50, state.stock.size())

    def test_win_needs_three_rows(self):
        state = self.state
        for row in range(3):
            for tableau in self.variant.row(state, row):
                self.assertFalse(self.variant.isWon(state))
                tableau.place(Card(0, 1))
        self.assertEqual(3, self.variant.rowsComplete(state))
        self.assertTrue(self.variant.isWon(state))

    def test_loss(self):
        state = self.state
        self.assertFalse(self.variant.isLost(state))
        state.stock.clear()
        state.waste.clear()
        self.assertTrue(self.variant.isLost(state))

        lower = state.tableaux[0].top()
        target = 2 * lower.rank if 2 * lower.rank <= 13 else 2 * lower.rank - 13
        state.waste.place(Card(0, target))
        self.assertTrue(followsDown(lower, state.waste.top(), TableauRule.DOUBLING))
        self.assertFalse(self.variant.isLost(state))

        for tableau in state.tableaux:
            if tableau.size() == 1:
                tableau.place(Card(1, 1))
        self.assertFalse(self.variant.isLost(state))
        self.assertTrue(self.variant.isWon(state))


class AztecPyramidTestCase(unittest.TestCase):
    def setUp(self):
        self.variant = AztecPyramid()
        self.state = self.variant.newGame(shuffled())

    def test_layout(self):
        state = self.state
        self.assertEqual([4] * 6, [t.size() for t in state.tableaux])
        self.assertIsInstance(state.pyramid, Pyramid)
        self.assertEqual(28, state.pyramid.size())
        self.assertEqual(7, len(state.pyramid.exposedCards()))
        self.assertTrue(state.stock.isEmpty())

    def test_nothing_lifts(self):
        self.assertIsNone(self.variant.pickupRun(self.state, self.state.tableaux[0]))

    def test_removal(self):
        state = self.state
        pyramid = state.pyramid
        slot = Pyramid.slotOf(6, 0)
        card = pyramid.slots[slot]
        partner = Pile([Card(0, 13 - card.rank)]) if card.rank != KING else None
        if partner is None:
            self.assertTrue(self.variant.remove(state, [(pyramid, slot)]))
        else:
            tableau = state.tableaux[0]
            tableau.place(partner.top())
            self.assertFalse(self.variant.remove(state, [(pyramid, slot), (tableau, 0)]))
            self.assertTrue(self.variant.remove(state, [(pyramid, slot), (tableau, tableau.size() - 1)]))
            self.assertEqual(4, tableau.size())
        self.assertIsNone(pyramid.slots[slot])
        self.assertFalse(self.variant.remove(state, [(pyramid, Pyramid.slotOf(0, 0))]))

    def test_win(self):
        self.assertFalse(self.variant.isWon(self.state))
        self.state.pyramid.clear()
        self.assertTrue(self.variant.isWon(self.state))
        self.assertFalse(self.variant.isLost(self.state))


if __name__ == '__main__':
    unittest.main()
