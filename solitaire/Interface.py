from solitaire.Events import GameEvent


class Interface:

    def __init__(self):
        self.core = None

    def onStart(self):
        pass

    def onEvent(self, event: GameEvent):
        """
        Invoked when a game event is performed.
        :param event:
        :return:
        """
        self.notifyRedraw()
        pass

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass

    def onLoss(self):
        pass


class RecordingInterface(Interface):
    """Keeps every event and outcome; used by tests and scripted play."""

    def __init__(self):
        super().__init__()
        self.started = 0
        self.events = []
        self.won = False
        self.lost = False

    def onStart(self):
        self.started += 1

    def onEvent(self, event: GameEvent):
        self.events.append(event)

    def onWin(self):
        self.won = True

    def onLoss(self):
        self.lost = True

    def eventsOf(self, kind):
        return [e for e in self.events if isinstance(e, kind)]
