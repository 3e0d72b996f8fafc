import time


def format_time(seconds):
    minutes = seconds // 60
    seconds = seconds % 60
    return f"{minutes:02d}:{seconds:02d}"


class GameTimer:
    """
    Elapsed play time that can be paused and resumed.
    The clock is injectable so tests can drive it by hand.
    """

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.accumulated = 0.0
        self.started_at = None

    @property
    def running(self):
        return self.started_at is not None

    @property
    def elapsed(self):
        total = self.accumulated
        if self.started_at is not None:
            total += self.clock() - self.started_at
        return int(total)

    def start(self):
        if self.started_at is None:
            self.started_at = self.clock()

    resume = start

    def pause(self):
        if self.started_at is not None:
            self.accumulated += self.clock() - self.started_at
            self.started_at = None

    # The board is finished; the elapsed time stays frozen
    stop = pause

    def toggle(self):
        if self.running:
            self.pause()
        else:
            self.resume()

    def reset(self):
        """Zeroes the time and keeps it running."""
        self.accumulated = 0.0
        self.started_at = self.clock()
