"""Merge chunk audio into one padded, loudness-normalized file with ffmpeg."""

import asyncio
import logging
import os
import shlex
from collections.abc import Sequence

from pydub import AudioSegment
from pydub.utils import mediainfo

from text_to_speech.constants import OUTPUT_CODEC, SILENCE_FILENAME
from text_to_speech.errors import AudioProcessingError, FilesystemError
from text_to_speech.models import AssemblyConfig, NormalizationTargets

logger = logging.getLogger(__name__)

STDERR_TAIL_CHARS = 2000


def ffmpeg_binary() -> str:
    """ffmpeg executable as configured for pydub (resolved from PATH)."""
    return AudioSegment.converter


def build_filter_graph(input_count: int, targets: NormalizationTargets) -> str:
    """Concatenate inputs 0..input_count-1 in order, then apply loudnorm.

    "[0:0][1:0][2:0]concat=n=3:v=0:a=1[cat];[cat]loudnorm=I=-16:TP=-1.5:LRA=11[out]"
    """
    if input_count < 1:
        raise ValueError("filter graph needs at least one input")
    refs = "".join(f"[{i}:0]" for i in range(input_count))
    loudnorm = (
        f"loudnorm=I={targets.integrated_loudness:g}"
        f":TP={targets.true_peak:g}"
        f":LRA={targets.loudness_range:g}"
    )
    return f"{refs}concat=n={input_count}:v=0:a=1[cat];[cat]{loudnorm}[out]"


def build_silence_args(reference: str, output: str, duration: float) -> list[str]:
    """Muted render of the reference file, padded and cut to duration seconds.

    Rendering from the first chunk keeps sample rate and channel layout
    identical to the speech, so concat needs no resampling.
    """
    return [
        "-i", reference,
        "-af", "volume=0,apad",
        "-t", f"{duration:g}",
        "-c:a", OUTPUT_CODEC,
        output,
    ]


def build_merge_args(inputs: Sequence[str], output: str, targets: NormalizationTargets) -> list[str]:
    args: list[str] = []
    for path in inputs:
        args += ["-i", path]
    args += [
        "-filter_complex", build_filter_graph(len(inputs), targets),
        "-map", "[out]",
        "-c:a", OUTPUT_CODEC,
        output,
    ]
    return args


async def _run_ffmpeg(args: list[str], action: str) -> None:
    cmd = [ffmpeg_binary(), "-y", "-hide_banner", "-loglevel", "error", *args]
    logger.debug("Running: %s", shlex.join(cmd))
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise AudioProcessingError(f"{action}: could not start ffmpeg ({e})") from e

    _, stderr = await proc.communicate()
    if proc.returncode != 0:
        tail = stderr.decode("utf-8", "ignore").strip()[-STDERR_TAIL_CHARS:]
        raise AudioProcessingError(f"{action} failed", proc.returncode, tail)


async def create_silence(reference: str, output: str, duration: float) -> None:
    await _run_ffmpeg(build_silence_args(reference, output, duration), "Silence generation")


def _remove_silence(path: str) -> None:
    if not os.path.exists(path):
        return
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("%s", FilesystemError(f"Could not remove silence clip {path}: {e}"))


def probe_duration(path: str) -> float | None:
    """Duration in seconds as reported by ffprobe, or None if unavailable."""
    try:
        return float(mediainfo(path)["duration"])
    except (OSError, KeyError, ValueError) as e:
        logger.debug("Could not probe duration of %s: %s", path, e)
        return None


async def assemble(
    audio_paths: Sequence[str],
    destination: str,
    config: AssemblyConfig,
) -> None:
    """Write [silence, chunk1..chunkN, silence] to destination, loudness-normalized.

    A single chunk goes through the same padding and filter graph as many.
    The silence clip is created next to destination and always removed
    afterwards; failing to remove it never replaces the outcome.
    """
    if not audio_paths:
        raise AudioProcessingError("No audio files to assemble")

    silence_path = os.path.join(os.path.dirname(os.path.abspath(destination)), SILENCE_FILENAME)
    try:
        print("\nGenerating silence clip for padding...")
        await create_silence(audio_paths[0], silence_path, config.padding_seconds)

        inputs = [silence_path, *audio_paths, silence_path]
        print(f"Merging and normalizing... ({len(inputs)} files)")
        await _run_ffmpeg(
            build_merge_args(inputs, destination, config.normalization),
            "Merge and normalize",
        )
    finally:
        _remove_silence(silence_path)

    duration = await asyncio.to_thread(probe_duration, destination)
    if duration is not None:
        logger.info("Assembled %s (%.1fs)", destination, duration)
