"""Build the immutable run configuration from defaults and overrides."""

from text_to_speech.constants import (
    DEFAULT_VOICE,
    DEFAULT_SPEED,
    DEFAULT_MODEL,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_PARALLEL,
    CHUNK_SEPARATORS,
    MIN_SPEED,
    MAX_SPEED,
    PADDING_SECONDS,
)
from text_to_speech.errors import ConfigurationError
from text_to_speech.models import (
    AssemblyConfig,
    NormalizationTargets,
    PipelineJob,
    SynthesisParams,
)


def build_job(
    output_path: str | None,
    voice: str | None = None,
    speed: float | None = None,
    model: str | None = None,
    parallel: int | None = None,
    chunk_size: int | None = None,
    debug_dir: str | None = None,
    normalization: NormalizationTargets | None = None,
    padding_seconds: float | None = None,
) -> PipelineJob:
    """Layer overrides on top of the defaults and validate the result.

    Any argument left as None keeps its default. Raises ConfigurationError
    for a missing output path or out-of-range values.
    """
    if not output_path:
        raise ConfigurationError("Output file path (--output / -o) is required.")

    speed = DEFAULT_SPEED if speed is None else speed
    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise ConfigurationError(
            f"Speed must be between {MIN_SPEED} and {MAX_SPEED}, got {speed}."
        )

    parallel = DEFAULT_PARALLEL if parallel is None else parallel
    if parallel < 1:
        raise ConfigurationError(f"Parallel must be at least 1, got {parallel}.")

    chunk_size = DEFAULT_CHUNK_SIZE if chunk_size is None else chunk_size
    if chunk_size < 1:
        raise ConfigurationError(f"Chunk size must be at least 1, got {chunk_size}.")

    padding = PADDING_SECONDS if padding_seconds is None else padding_seconds
    if padding <= 0:
        raise ConfigurationError(f"Padding must be positive, got {padding}.")

    return PipelineJob(
        output_path=output_path,
        synthesis=SynthesisParams(
            model=model or DEFAULT_MODEL,
            voice=voice or DEFAULT_VOICE,
            speed=speed,
        ),
        assembly=AssemblyConfig(
            normalization=normalization or NormalizationTargets(),
            padding_seconds=padding,
        ),
        parallel=parallel,
        chunk_size=chunk_size,
        separators=tuple(CHUNK_SEPARATORS),
        debug_dir=debug_dir or None,
    )
