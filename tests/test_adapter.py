import unittest

from shell.adapter import CoreAdapter
from shell.view_model import GameViewModel
from solitaire.Cards import Card, newDeck
from solitaire.Core import Core
from solitaire.Events import CardMove, CardsRemoved, ReserveFill, StockDeal
from solitaire.Interface import RecordingInterface
from solitaire.Variants import ARGOS, AZTEC_PYRAMID, GameConfig


class CoreAdapterTestCase(unittest.TestCase):
    def test_snapshot_of_pyramid_game(self):
        core = Core(RecordingInterface())
        core.startGame(GameConfig(AZTEC_PYRAMID), newDeck())
        vm = CoreAdapter.snapshot(core)
        self.assertIsInstance(vm, GameViewModel)
        self.assertEqual(AZTEC_PYRAMID, vm.variant)
        self.assertEqual(28, len(vm.pyramid.slots))
        self.assertEqual(7, len(vm.pyramid.exposed))
        tableaux = [p for p in vm.piles if p.kind == "tableau"]
        self.assertEqual(6, len(tableaux))
        self.assertEqual("10♠", tableaux[0].cards[-1].label)
        self.assertFalse(vm.game_ended)

        core.askRemove(core.state.pyramid, (6, 0))
        vm = CoreAdapter.snapshot(core)
        self.assertTrue(vm.pyramid.slots[21].highlighted)
        core.askRemove(core.state.pyramid, (6, 1))
        vm = CoreAdapter.snapshot(core)
        self.assertIsNone(vm.pyramid.slots[21])

    def test_snapshot_reports_hand_and_piles(self):
        core = Core(RecordingInterface())
        core.startGame(GameConfig(ARGOS, seed=3))
        core.attemptPickup(core.state.waste)
        vm = CoreAdapter.snapshot(core)
        self.assertEqual(1, vm.holding)
        self.assertIsNone(vm.pyramid)
        kinds = {p.name: p.kind for p in vm.piles}
        self.assertEqual("stock", kinds["s"])
        self.assertEqual("discard", kinds["d"])
        self.assertEqual(52, sum(1 for k in kinds.values() if k == "tableau"))
        self.assertEqual((), vm.hints)

    def test_snapshot_carries_hints(self):
        core = Core(RecordingInterface())
        core.startGame(GameConfig(ARGOS, seed=3))
        state = core.state
        lower = state.tableaux[0].top()
        state.waste.clear()
        state.waste.place(Card(0, 2 * lower.rank if 2 * lower.rank <= 13 else 2 * lower.rank - 13))
        hints = core.askHint()
        vm = CoreAdapter.snapshot(core)
        self.assertEqual(hints, vm.hints)
        self.assertIn("t0", vm.hints)

    def test_event_to_animation(self):
        anim = CoreAdapter.event_to_animation(CardMove("w", "t0", 1))
        self.assertEqual("MOVE", anim.type)
        self.assertEqual({"src": "w", "dest": "t0", "count": 1}, anim.payload)
        self.assertEqual("DEAL", CoreAdapter.event_to_animation(StockDeal(1, 1)).type)
        self.assertEqual("FILL", CoreAdapter.event_to_animation(ReserveFill("t2")).type)
        removed = CoreAdapter.event_to_animation(CardsRemoved(("p", "t0"), (Card.parse("3C"), Card.parse("10S"))))
        self.assertEqual(["3♣", "10♠"], removed.payload["cards"])


if __name__ == '__main__':
    unittest.main()
