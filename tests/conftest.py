"""Shared fixtures for text-to-speech tests."""

import re
import shutil
import subprocess
from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest
from pydub import AudioSegment

from text_to_speech.models import Chunk

requires_ffmpeg = pytest.mark.skipif(
    shutil.which("ffmpeg") is None or shutil.which("ffprobe") is None,
    reason="ffmpeg/ffprobe not installed",
)


def make_tone(duration_ms=1000, freq=440.0, amplitude=0.3, sample_rate=24000):
    """Mono sine tone as an AudioSegment."""
    t = np.linspace(0, duration_ms / 1000, int(sample_rate * duration_ms / 1000), endpoint=False)
    samples = (np.sin(2 * np.pi * freq * t) * amplitude * 32767).astype(np.int16)
    return AudioSegment(
        data=samples.tobytes(),
        sample_width=2,
        frame_rate=sample_rate,
        channels=1,
    )


def mp3_bytes(audio, tmp_path, name="clip.mp3"):
    """Encode an AudioSegment to MP3 and return the bytes."""
    path = tmp_path / name
    audio.export(str(path), format="mp3")
    return path.read_bytes()


def duration_seconds(path):
    return AudioSegment.from_file(str(path)).duration_seconds


def integrated_loudness(path):
    """Integrated loudness (LUFS) of a file, measured with ffmpeg's ebur128 filter."""
    proc = subprocess.run(
        ["ffmpeg", "-hide_banner", "-nostats", "-i", str(path),
         "-filter_complex", "ebur128", "-f", "null", "-"],
        capture_output=True,
        text=True,
        check=True,
    )
    values = re.findall(r"I:\s+(-?\d+(?:\.\d+)?) LUFS", proc.stderr)
    return float(values[-1])


def fake_speech_client(audio=b"fake-mp3-bytes", side_effect=None):
    """Stand-in for AsyncOpenAI whose audio.speech.create returns `audio`."""
    client = MagicMock()

    async def create(**kwargs):
        response = MagicMock()
        response.content = audio
        return response

    client.audio.speech.create = AsyncMock(side_effect=side_effect or create)
    client.close = AsyncMock()
    return client


@pytest.fixture
def tone_mp3(tmp_path):
    """Factory writing a sine-tone MP3 of the given length into tmp_path."""
    def factory(name="tone.mp3", duration_ms=1000, freq=440.0):
        path = tmp_path / name
        make_tone(duration_ms, freq).export(str(path), format="mp3")
        return path
    return factory


@pytest.fixture
def sample_chunks():
    """Five short chunks indexed 0..4."""
    return [Chunk(index=i, text=f"Sentence number {i}.") for i in range(5)]
