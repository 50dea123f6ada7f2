import random
import unittest

from solitaire.Cards import ACE, CLUBS, DIAMONDS, HEARTS, KING, SPADES, Card, newDeck, sameColor, shuffledDeck


class CardTestCase(unittest.TestCase):
    def test_suit_and_rank_are_read_only(self):
        card = Card(HEARTS, 7)
        with self.assertRaises(AttributeError):
            card.rank = 8
        with self.assertRaises(AttributeError):
            card.suit = SPADES

    def test_rejects_out_of_range_values(self):
        with self.assertRaises(ValueError):
            Card(HEARTS, 0)
        with self.assertRaises(ValueError):
            Card(HEARTS, 14)
        with self.assertRaises(ValueError):
            Card(7, 1)

    def test_colors(self):
        self.assertEqual("red", Card(HEARTS, 1).color())
        self.assertEqual("red", Card(DIAMONDS, 1).color())
        self.assertEqual("black", Card(CLUBS, 1).color())
        self.assertTrue(sameColor(Card(CLUBS, 2), Card(SPADES, 9)))
        self.assertFalse(sameColor(Card(CLUBS, 2), Card(HEARTS, 2)))

    def test_equality_is_by_value(self):
        self.assertEqual(Card(SPADES, KING), Card(SPADES, KING, faceUp=False))
        self.assertNotEqual(Card(SPADES, KING), Card(CLUBS, KING))
        self.assertEqual(1, len({Card(SPADES, KING), Card(SPADES, KING)}))

    def test_game_str_hides_face_down_cards(self):
        card = Card(HEARTS, 10)
        self.assertEqual("10♥", card.gameStr())
        card.highlighted = True
        self.assertEqual("*10♥", card.gameStr())
        card.faceUp = False
        self.assertEqual("---", card.gameStr())

    def test_parse(self):
        self.assertEqual(Card(HEARTS, 10), Card.parse("10H"))
        self.assertEqual(Card(SPADES, 12), Card.parse("qs"))
        self.assertEqual(Card(CLUBS, ACE), Card.parse("A♣"))
        with self.assertRaises(ValueError):
            Card.parse("1X")
        with self.assertRaises(ValueError):
            Card.parse("Z")

    def test_decks(self):
        deck = newDeck(2)
        self.assertEqual(104, len(deck))
        self.assertEqual(2, deck.count(Card(HEARTS, 5)))
        no_kings = newDeck(2, ranks=range(1, 13))
        self.assertEqual(96, len(no_kings))
        a = shuffledDeck(1, random.Random(7))
        b = shuffledDeck(1, random.Random(7))
        self.assertEqual(a, b)
        self.assertCountEqual(newDeck(), a)


if __name__ == '__main__':
    unittest.main()
