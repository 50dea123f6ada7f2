import argparse
import logging
import sys
import time

from solitaire.Core import Core
from solitaire.Errors import SolitaireError
from solitaire.Interface import Interface
from solitaire.Piles import Pyramid
from solitaire.Variants import VARIANTS, GameConfig
from shell import settings_store, stats_store

logger = logging.getLogger(__name__)

HELP = """commands:
  mv <src>[:idx] [dest]   move the run starting at idx (default: top card); no dest tries every pile
  deal                    turn the next stock card
  rm <pile>[:probe]       remove a card (pyramid probe is row,col)
  hint                    show where the waste card can go
  help                    show this text
  quit
piles: s stock, w waste, r reserve, fN foundation, tN tableau, p pyramid"""


class CommandLineInterface(Interface):

    def printAll(self):
        core = self.core
        state = core.state
        print(f"{core.variant.title}        Moves: {core.moves}")
        for name, pile in state.named():
            if isinstance(pile, Pyramid):
                self.printPyramid(pile)
            elif name in ("s", "d"):
                print(f"{name}: {pile.size()} cards")
            elif name in ("w", "r"):
                top = pile.top()
                print(f"{name}: {top.gameStr() if top else '--'}  ({pile.size()})")
            elif name.startswith("f"):
                top = pile.top()
                print(f"{name}: {top.gameStr() if top else '[]'}  ({pile.size()})")
            elif not pile.isEmpty() or not state.pyramid:
                print(f"{name}: " + " ".join(card.gameStr() for card in pile))
        print()

    @staticmethod
    def printPyramid(pyramid: Pyramid):
        slots = pyramid.slots
        for row in range(pyramid.rows):
            line = "    " * (pyramid.rows - row - 1)
            for col in range(row + 1):
                index = Pyramid.slotOf(row, col)
                card = slots[index] if index < len(slots) else None
                line += f"{card.gameStr() if card else '.':>5}   "
            print(f"p{row}: {line}")

    def onStart(self):
        print("Game started!")
        self.printAll()

    def notifyRedraw(self):
        self.printAll()

    def onWin(self):
        print("You win!")

    def onLoss(self):
        print("No moves left, you lose!")


def parseTarget(text: str):
    """``"t3:2"`` -> ("t3", 2); ``"p:6,2"`` -> ("p", (6, 2)); ``"w"`` -> ("w", None)."""
    name, _, probeText = text.partition(":")
    if not name:
        raise ValueError(f"bad pile: {text!r}")
    if not probeText:
        return name, None
    if "," in probeText:
        row, col = probeText.split(",", 1)
        return name, (int(row), int(col))
    return name, int(probeText)


def parseCommand(line: str):
    words = line.split()
    if not words:
        raise ValueError("empty command")
    verb = words[0].lower()
    if verb in ("mv", "move"):
        if len(words) not in (2, 3):
            raise ValueError("usage: mv <src>[:idx] [dest]")
        return "mv", parseTarget(words[1]), words[2] if len(words) == 3 else None
    if verb in ("rm", "remove"):
        if len(words) != 2:
            raise ValueError("usage: rm <pile>[:probe]")
        return "rm", parseTarget(words[1]), None
    if verb in ("deal", "d"):
        return "deal", None, None
    if verb == "hint":
        return "hint", None, None
    if verb in ("quit", "q", "exit"):
        return "quit", None, None
    if verb in ("help", "h", "?"):
        return "help", None, None
    raise ValueError(f"unknown command: {verb}")


def execute(core: Core, line: str) -> bool:
    """Run one command. Returns False when the player asked to quit."""
    try:
        verb, target, dest = parseCommand(line)
    except ValueError:
        print("Invalid command!")
        return True
    state = core.state
    if verb == "quit":
        return False
    if verb == "help":
        print(HELP)
    elif verb == "deal":
        if not core.askDeal():
            print("No card left!")
    elif verb == "hint":
        hints = core.askHint()
        if hints:
            print("Hint: " + " ".join(hints))
        else:
            print("No hint!")
    elif verb == "mv":
        src = state.pileByName(target[0])
        destPile = state.pileByName(dest) if dest is not None else None
        if src is None or (dest is not None and destPile is None):
            print("Invalid index!")
        elif destPile is None:
            if not core.askAutoMove(src, target[1]):
                print("Cannot move!")
        elif not core.askMove(src, target[1], destPile):
            print("Cannot move!")
    elif verb == "rm":
        pile = state.pileByName(target[0])
        if pile is None:
            print("Invalid index!")
        elif not core.askRemove(pile, target[1]):
            print("Cannot remove!")
    return True


def _readCommands():
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def play(core: Core, commands) -> bool:
    """Feed commands until the game ends or the player quits. Returns True if the game ended."""
    for line in commands:
        if not execute(core, line):
            return False
        if core.gameEnded:
            return True
    return core.gameEnded


def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solitaire-pack", description="Play a solitaire game in the terminal.")
    parser.add_argument("--variant", choices=sorted(VARIANTS), default=None, help="Game to play.")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed. Default: random.")
    parser.add_argument("--year", type=int, default=None, help="Year for Anno Domini foundations. Default: this year.")
    parser.add_argument("--draw", type=int, default=None, help="Cards turned per deal.")
    parser.add_argument("--passes", type=int, default=None, help="Times the waste may be recycled. Default: unlimited.")
    parser.add_argument("--no-stats", action="store_true", help="Do not record statistics.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def configFromArgs(args: argparse.Namespace, settings=None) -> GameConfig:
    config = settings_store.to_game_config(settings if settings is not None else settings_store.DEFAULT_SETTINGS)
    if args.variant is not None:
        config.variant = args.variant
    if args.seed is not None:
        config.seed = args.seed
    if args.year is not None:
        config.year = args.year
    if args.draw is not None:
        config.drawCount = max(1, args.draw)
    if args.passes is not None:
        config.stockPasses = max(0, args.passes)
    return config


def setupLogging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s", handlers=[logging.StreamHandler(sys.stderr)])


def main(argv=None):
    args = buildParser().parse_args(argv)
    setupLogging(args.verbose)
    config = configFromArgs(args, settings_store.load_settings())

    core = Core(CommandLineInterface())
    try:
        core.startGame(config)
    except SolitaireError as e:
        print(f"Cannot start game: {e}")
        return 1
    if not args.no_stats:
        stats_store.save_stats(stats_store.record_game_started(stats_store.load_stats(), config.variant))

    started = time.monotonic()
    ended = play(core, _readCommands())
    if ended and not args.no_stats:
        duration = time.monotonic() - started
        stats = stats_store.load_stats()
        if core.won:
            stats = stats_store.record_game_won(stats, config.variant, duration, core.moves)
        else:
            stats = stats_store.record_game_lost(stats, config.variant, duration, core.moves)
        stats_store.save_stats(stats)
        logger.debug("statistics saved to %s", stats_store.STATS_PATH)
    return 0


if __name__ == '__main__':
    sys.exit(main())
