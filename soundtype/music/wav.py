import io

import numpy as np
from pydub import AudioSegment

from .types import SampleBuffer

HEADER_SIZE = 44
SAMPLE_WIDTH = 2  # bytes, signed 16-bit PCM


def quantize(samples: np.ndarray) -> np.ndarray:
    """Float samples to little-endian int16: clamp, scale by 32768/32767, truncate toward zero."""
    clipped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    scaled = np.where(clipped < 0, clipped * 32768.0, clipped * 32767.0)
    return np.trunc(scaled).astype("<i2")


def encode(buffer: SampleBuffer) -> bytes:
    """Canonical RIFF/WAVE bytes: 44-byte header then interleaved 16-bit PCM."""
    pcm = quantize(buffer.interleaved())
    segment = AudioSegment(
        pcm.tobytes(),
        sample_width=SAMPLE_WIDTH,
        frame_rate=buffer.sample_rate,
        channels=buffer.channels,
    )
    out = io.BytesIO()
    segment.export(out, format="wav")
    return out.getvalue()


def decode(data: bytes) -> SampleBuffer:
    segment = AudioSegment.from_wav(io.BytesIO(data))
    if segment.sample_width != SAMPLE_WIDTH:
        raise ValueError(f"Expected 16-bit PCM, got {segment.sample_width * 8}-bit samples.")
    pcm = np.array(segment.get_array_of_samples(), dtype=np.float64)
    scaled = np.where(pcm < 0, pcm / 32768.0, pcm / 32767.0)
    frames = scaled.reshape(-1, segment.channels).T
    return SampleBuffer.from_array(frames, segment.frame_rate)
