"""Data models for a text-to-speech run."""

from dataclasses import dataclass

from text_to_speech.constants import (
    TARGET_INTEGRATED_LOUDNESS,
    TARGET_TRUE_PEAK,
    TARGET_LOUDNESS_RANGE,
    PADDING_SECONDS,
)


@dataclass(frozen=True)
class Chunk:
    index: int         # 0-based position in the segmented text
    text: str          # trimmed, never empty

    @property
    def stem(self) -> str:
        """File stem shared by the chunk's text and audio artifacts."""
        return f"part_{self.index + 1:03d}"


@dataclass(frozen=True)
class SynthesisResult:
    index: int
    audio_path: str


@dataclass(frozen=True)
class SynthesisParams:
    model: str
    voice: str
    speed: float


@dataclass(frozen=True)
class NormalizationTargets:
    integrated_loudness: float = TARGET_INTEGRATED_LOUDNESS   # LUFS
    true_peak: float = TARGET_TRUE_PEAK                       # dB
    loudness_range: float = TARGET_LOUDNESS_RANGE             # LU


@dataclass(frozen=True)
class AssemblyConfig:
    normalization: NormalizationTargets = NormalizationTargets()
    padding_seconds: float = PADDING_SECONDS


@dataclass(frozen=True)
class PipelineJob:
    output_path: str
    synthesis: SynthesisParams
    assembly: AssemblyConfig
    parallel: int
    chunk_size: int
    separators: tuple[str, ...]
    debug_dir: str | None = None
