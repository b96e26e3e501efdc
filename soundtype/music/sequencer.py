import asyncio
import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Tuple

from .envelope import build_envelope
from .note_mapper import map_character
from .synthesis import synthesize_note
from .types import AudioOutput, EnvelopeCurve, InstrumentPreset, Note

NOTE_INTERVAL = 0.2  # seconds between successive characters
TAIL_PADDING = 0.5  # extra seconds when pre-sizing an offline buffer

_LOG = logging.getLogger("soundtype.sequencer")


def layout(text: str, preset: InstrumentPreset, interval: float = NOTE_INTERVAL) -> List[Note]:
    return [
        Note(character=char, frequency=map_character(char, preset), start=index * interval)
        for index, char in enumerate(text)
    ]


def total_duration(text: str, preset: InstrumentPreset, interval: float = NOTE_INTERVAL) -> float:
    if not text:
        return 0.0
    return len(text) * interval + preset.envelope.duration


def buffer_duration(text: str, preset: InstrumentPreset, interval: float = NOTE_INTERVAL) -> float:
    if not text:
        return 0.0
    return total_duration(text, preset, interval) + TAIL_PADDING


_Event = Tuple[float, int, Note, InstrumentPreset, EnvelopeCurve]


class LiveScheduler:
    """Queue of timed note events, synthesized and sent to the output when due.

    Events live in a heap ordered by fire time. ``fire_due`` drains whatever
    is due at ``now``; ``run`` does the same on the asyncio loop until the
    queue is empty. ``cancel`` drops pending events only, notes already sent
    to the output keep ringing through their release.
    """

    def __init__(
        self,
        output: AudioOutput,
        sample_rate: int = 44100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.output = output
        self.sample_rate = sample_rate
        self._clock = clock
        self._queue: List[_Event] = []
        self._counter = itertools.count()
        self._wakeup: Optional[asyncio.Event] = None

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def is_playing(self) -> bool:
        return bool(self._queue)

    def next_fire_time(self) -> Optional[float]:
        return self._queue[0][0] if self._queue else None

    def schedule(self, notes: List[Note], preset: InstrumentPreset, now: Optional[float] = None) -> int:
        now = self._clock() if now is None else now
        curve = build_envelope(preset.envelope)
        for note in notes:
            heapq.heappush(self._queue, (now + note.start, next(self._counter), note, preset, curve))
        return len(notes)

    def fire_due(self, now: Optional[float] = None) -> int:
        now = self._clock() if now is None else now
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, note, preset, curve = heapq.heappop(self._queue)
            samples = synthesize_note(note, preset, curve, self.sample_rate)
            self.output.play(samples, self.sample_rate)
            fired += 1
        return fired

    def cancel(self) -> int:
        dropped = len(self._queue)
        self._queue.clear()
        if self._wakeup is not None:
            self._wakeup.set()
        if dropped:
            _LOG.info("Cancelled %d pending notes", dropped)
        return dropped

    async def run(self) -> None:
        self._wakeup = asyncio.Event()
        try:
            while self._queue:
                delay = self.next_fire_time() - self._clock()
                if delay > 0:
                    try:
                        await asyncio.wait_for(self._wakeup.wait(), timeout=delay)
                    except asyncio.TimeoutError:
                        pass  # next event is due
                    self._wakeup.clear()
                self.fire_due()
        finally:
            self._wakeup = None
