"""Rhythm encoding - run-length encode the tone/silence stream.

If the event stream is 0001100111100 (1 = tone), the runs are
(0, 3), (1, 2), (0, 2), (1, 4), (0, 2): the "rhythm" of the message.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from ..core import Run

logger = logging.getLogger(__name__)


class RhythmEncoder:
    """Online, single-pass run-length encoder.

    The encoder starts from a look-behind ``initial_state``. If the first
    event differs from it no zero-length run is emitted, so every run has
    a positive duration and the encoding is lossless.
    """

    def __init__(self, initial_state: bool = False):
        self.initial_state = initial_state
        self.reset()

    def reset(self) -> None:
        self.state = self.initial_state
        self.tally = 0

    def push(self, event: bool) -> Optional[Run]:
        """Consume one event; return the run it completes, if any."""
        event = bool(event)
        if event == self.state:
            self.tally += 1
            return None
        completed = Run(self.state, self.tally) if self.tally > 0 else None
        self.state = event
        self.tally = 1
        return completed

    def flush(self) -> Optional[Run]:
        """Emit the outstanding partial run at end of stream."""
        if self.tally == 0:
            return None
        run = Run(self.state, self.tally)
        self.reset()
        return run

    def encode(self, events: Iterable[bool]) -> Iterator[Run]:
        """Stream runs for a sequence of events, flushing the final run."""
        for event in events:
            run = self.push(event)
            if run is not None:
                yield run
        last = self.flush()
        if last is not None:
            yield last


def skip_leading_silence(runs: Iterable[Run]) -> Iterator[Run]:
    """
    Drop silence runs that precede the first tone.

    The first run of a stream is provisional: a leading silence measures
    the time before keying started, not a Morse gap.
    """
    started = False
    for run in runs:
        if not started:
            if not run.state:
                logger.debug("Dropping leading silence of %d events", run.duration)
                continue
            started = True
        yield run


def expand_runs(runs: Iterable[Run]) -> List[bool]:
    """Expand runs back into the event sequence they encode."""
    events: List[bool] = []
    for run in runs:
        events.extend([run.state] * run.duration)
    return events
