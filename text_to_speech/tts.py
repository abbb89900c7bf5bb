"""Speech synthesis via the OpenAI audio API."""

import logging

from openai import AsyncOpenAI, OpenAIError

from text_to_speech.constants import AUDIO_FORMAT
from text_to_speech.errors import ConfigurationError, SynthesisError
from text_to_speech.models import Chunk, SynthesisParams

logger = logging.getLogger(__name__)


def create_client() -> AsyncOpenAI:
    """Build the async client from OPENAI_API_KEY / OPENAI_BASE_URL.

    The SDK's own retries are disabled: one request per chunk, and any
    failure is final for the run.
    """
    try:
        return AsyncOpenAI(max_retries=0)
    except OpenAIError as e:
        raise ConfigurationError(f"OpenAI client setup failed: {e}") from e


async def synthesize(client: AsyncOpenAI, chunk: Chunk, params: SynthesisParams) -> bytes:
    """Synthesize one chunk and return the encoded audio bytes.

    Raises SynthesisError carrying the chunk index on any API failure or
    an empty response body.
    """
    logger.debug("Requesting chunk %d (%d chars)", chunk.index, len(chunk.text))
    try:
        response = await client.audio.speech.create(
            model=params.model,
            voice=params.voice,
            input=chunk.text,
            speed=params.speed,
            response_format=AUDIO_FORMAT,
        )
    except OpenAIError as e:
        raise SynthesisError(chunk.index, e) from e

    audio = response.content
    if not audio:
        # 0-byte response counts as failure
        raise SynthesisError(chunk.index, ValueError("service returned no audio"))
    return audio
