"""PyAudio-backed live output for the scheduler."""
import logging
import threading
from typing import List, Optional, Tuple

import numpy as np

from soundtype.music.types import AudioDeviceUnavailable
from soundtype.music.wav import quantize

try:  # optional live playback
    import pyaudio
except ImportError:  # pragma: no cover - optional dependency
    pyaudio = None  # type: ignore


class PyAudioOutput:
    """Callback-mode PortAudio stream that sums every note currently sounding."""

    def __init__(self, sample_rate: int = 44100, channels: int = 2, buffer_size: int = 512) -> None:
        self.sample_rate = sample_rate
        self.channels = channels
        self.buffer_size = buffer_size
        self._audio = None
        self._stream = None
        self._voices: List[Tuple[np.ndarray, int]] = []
        self._lock = threading.Lock()
        self._log = logging.getLogger("soundtype.output")

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def open(self) -> None:
        if self.is_open:
            return
        if pyaudio is None:
            raise AudioDeviceUnavailable("PyAudio is not installed; run 'pip install pyaudio'.")
        audio = pyaudio.PyAudio()
        try:
            self._stream = audio.open(
                format=pyaudio.paInt16,
                channels=self.channels,
                rate=self.sample_rate,
                output=True,
                frames_per_buffer=self.buffer_size,
                stream_callback=self._callback,
            )
        except Exception as exc:
            audio.terminate()
            raise AudioDeviceUnavailable(f"Could not open audio output ({exc}).") from exc
        self._audio = audio
        self._log.info("Opened audio output at %d Hz", self.sample_rate)

    def play(self, samples: np.ndarray, sample_rate: int) -> None:
        if not self.is_open:
            raise AudioDeviceUnavailable("Audio output is not open.")
        if sample_rate != self.sample_rate:
            raise ValueError(f"Output runs at {self.sample_rate} Hz, got {sample_rate} Hz samples.")
        with self._lock:
            self._voices.append((samples, 0))

    def close(self) -> None:
        if self._stream is not None:
            self._stream.stop_stream()
            self._stream.close()
            self._stream = None
        if self._audio is not None:
            self._audio.terminate()
            self._audio = None
        with self._lock:
            self._voices.clear()

    def _mix(self, frame_count: int) -> np.ndarray:
        mixed = np.zeros(frame_count, dtype=np.float64)
        with self._lock:
            still_playing: List[Tuple[np.ndarray, int]] = []
            for samples, position in self._voices:
                chunk = samples[position : position + frame_count]
                mixed[: len(chunk)] += chunk
                position += len(chunk)
                if position < len(samples):
                    still_playing.append((samples, position))
            self._voices = still_playing
        return mixed

    def _callback(self, in_data: Optional[bytes], frame_count: int, time_info, status) -> Tuple[bytes, int]:
        mono = self._mix(frame_count)
        frames = np.repeat(mono[:, np.newaxis], self.channels, axis=1).reshape(-1)
        return quantize(frames).tobytes(), pyaudio.paContinue
