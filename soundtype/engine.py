import asyncio
import logging
from typing import Optional, Tuple

from soundtype.music.envelope import build_envelope
from soundtype.music.note_mapper import map_character
from soundtype.music.presets import DEFAULT_CATALOG, PresetCatalog
from soundtype.music.sequencer import NOTE_INTERVAL, LiveScheduler, buffer_duration, layout
from soundtype.music.synthesis import render_notes, synthesize_note
from soundtype.music.types import (
    AudioDeviceUnavailable,
    AudioOutput,
    EncodedAudioFile,
    InstrumentPreset,
    Note,
    SampleBuffer,
)
from soundtype.music.wav import encode

DEFAULT_FILENAME = "soundtype-melody.wav"


class SoundTypeEngine:
    """Turns typed text into a melody, played live or rendered to WAV.

    The live output is opened lazily on the first play request. If it cannot
    be opened the request is dropped with a warning and the next request
    tries again. Offline rendering never touches the output.
    """

    def __init__(
        self,
        catalog: PresetCatalog = DEFAULT_CATALOG,
        output: Optional[AudioOutput] = None,
        sample_rate: int = 44100,
        channels: int = 2,
        interval: float = NOTE_INTERVAL,
    ) -> None:
        self.catalog = catalog
        self.output = output
        self.sample_rate = sample_rate
        self.channels = channels
        self.interval = interval
        self._scheduler: Optional[LiveScheduler] = (
            LiveScheduler(output, sample_rate) if output is not None else None
        )
        self._output_ready = False
        self._closed = False
        self._log = logging.getLogger("soundtype.engine")

    @property
    def is_playing(self) -> bool:
        return self._scheduler is not None and self._scheduler.is_playing

    def play_character(self, char: str, preset_id: str) -> bool:
        """Sound a single key press immediately."""
        preset = self.catalog.get(preset_id)
        if not self._ensure_output():
            return False
        note = Note(character=char, frequency=map_character(char, preset), start=0.0)
        samples = synthesize_note(note, preset, build_envelope(preset.envelope), self.sample_rate)
        try:
            self.output.play(samples, self.sample_rate)
        except AudioDeviceUnavailable as exc:
            self._drop_output(exc)
            return False
        return True

    async def play_text(self, text: str, preset_id: str) -> int:
        """Play ``text`` one note per interval; returns how many notes were scheduled."""
        preset = self.catalog.get(preset_id)
        if not text or self.is_playing:
            return 0
        if not self._ensure_output():
            return 0

        scheduled = self._scheduler.schedule(layout(text, preset, self.interval), preset)
        self._log.info("Playing %d notes with preset %s", scheduled, preset.name)
        try:
            await self._scheduler.run()
        except AudioDeviceUnavailable as exc:
            self._scheduler.cancel()
            self._drop_output(exc)
        return scheduled

    def stop(self) -> int:
        """Drop notes that have not started yet; sounding notes decay on their own."""
        if self._scheduler is None:
            return 0
        return self._scheduler.cancel()

    def render(self, text: str, preset_id: str) -> SampleBuffer:
        preset = self.catalog.get(preset_id)
        return self._render(text, preset)

    async def download_audio(
        self,
        text: str,
        preset_id: str,
        filename: str = DEFAULT_FILENAME,
    ) -> Optional[EncodedAudioFile]:
        preset = self.catalog.get(preset_id)
        if not text:
            self._log.info("Nothing to render for an empty text.")
            return None

        data, duration = await asyncio.to_thread(self._render_wav, text, preset)
        self._log.info("Rendered %s (%d bytes, %.1f seconds)", filename, len(data), duration)
        return EncodedAudioFile(filename=filename, data=data, duration=duration)

    def close(self) -> None:
        self.stop()
        if self.output is not None and self._output_ready:
            self.output.close()
        self._output_ready = False
        self._closed = True

    def _render(self, text: str, preset: InstrumentPreset) -> SampleBuffer:
        notes = layout(text, preset, self.interval)
        return render_notes(
            notes,
            preset,
            build_envelope(preset.envelope),
            buffer_duration(text, preset, self.interval),
            sample_rate=self.sample_rate,
            channels=self.channels,
        )

    def _render_wav(self, text: str, preset: InstrumentPreset) -> Tuple[bytes, float]:
        buffer = self._render(text, preset)
        return encode(buffer), buffer.duration

    def _ensure_output(self) -> bool:
        if self._closed:
            self._log.warning("Engine is closed; ignoring playback request.")
            return False
        if self.output is None:
            self._log.debug("No live output configured; ignoring playback request.")
            return False
        if self._output_ready:
            return True
        try:
            self.output.open()
        except AudioDeviceUnavailable as exc:
            self._log.warning("Live audio unavailable (%s); will retry on next play.", exc)
            return False
        self._output_ready = True
        return True

    def _drop_output(self, exc: AudioDeviceUnavailable) -> None:
        self._log.warning("Live audio output failed (%s); will reopen on next play.", exc)
        self._output_ready = False
