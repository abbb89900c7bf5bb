"""Pipeline orchestration: segment, synthesize in parallel, assemble, finalize."""

import asyncio
import logging
import os

from openai import AsyncOpenAI

from text_to_speech.assembly import assemble
from text_to_speech.constants import AUDIO_FORMAT, COMBINED_FILENAME
from text_to_speech.errors import InputError
from text_to_speech.models import Chunk, PipelineJob, SynthesisResult
from text_to_speech.scheduler import run_tasks
from text_to_speech.segmenter import split_text
from text_to_speech.tts import create_client, synthesize
from text_to_speech.workspace import Workspace

logger = logging.getLogger(__name__)


def read_input_file(path: str) -> str:
    """Read a UTF-8 text file, rejecting missing, unreadable or blank files."""
    if not os.path.isfile(path):
        raise InputError(f"File not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Could not read {path}: {e}") from e
    if not text.strip():
        raise InputError(f"File content is empty: {path}")
    return text


async def run_pipeline(
    job: PipelineJob,
    text: str,
    client: AsyncOpenAI | None = None,
    workspace: Workspace | None = None,
) -> str | None:
    """Turn text into one normalized audio file at job.output_path.

    Returns the output path, or None when the text holds no speakable
    chunks. The workspace is removed on every path; on failure it is first
    snapshotted to job.debug_dir when one is configured.
    """
    workspace = workspace or Workspace(debug_dir=job.debug_dir)
    owns_client = client is None
    succeeded = False

    try:
        workspace.prepare()
        params = job.synthesis
        print("=== Starting speech generation ===")
        print(f"Output: {job.output_path}")
        print(f"Settings: Model={params.model}, Voice={params.voice}, Speed={params.speed}")

        chunks = split_text(text, job.chunk_size, job.separators)
        print(f"Split text into {len(chunks)} chunks.")
        logger.debug("Chunk lengths: %s", [len(chunk.text) for chunk in chunks])
        if not chunks:
            print("No text to process.")
            succeeded = True
            return None

        if client is None:
            client = create_client()

        total = len(chunks)
        completed = 0

        async def process_chunk(chunk: Chunk) -> SynthesisResult:
            nonlocal completed
            await asyncio.to_thread(workspace.save_text, f"{chunk.stem}.txt", chunk.text)
            audio = await synthesize(client, chunk, params)
            path = await asyncio.to_thread(workspace.save, f"{chunk.stem}.{AUDIO_FORMAT}", audio)
            completed += 1
            print(f"  Generated chunk {completed}/{total}: {chunk.stem}")
            return SynthesisResult(index=chunk.index, audio_path=path)

        print(f"Generating ({job.parallel} parallel)...")
        results = await run_tasks(chunks, job.parallel, process_chunk)
        print("All chunks generated.")

        await assemble(
            [result.audio_path for result in results],
            workspace.path(COMBINED_FILENAME),
            job.assembly,
        )
        workspace.finalize(COMBINED_FILENAME, job.output_path)
        print(f"=== Done: {job.output_path} ===")
        succeeded = True
        return job.output_path
    finally:
        if not succeeded and job.debug_dir:
            workspace.copy_debug()
        workspace.cleanup()
        if owns_client and client is not None:
            await client.close()


def run(job: PipelineJob, text: str) -> str | None:
    """Synchronous entry point around run_pipeline()."""
    return asyncio.run(run_pipeline(job, text))
