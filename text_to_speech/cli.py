"""Command-line interface: parse flags, read input, run the pipeline."""

import argparse
import logging
import shutil
import sys

from dotenv import load_dotenv

from text_to_speech.assembly import ffmpeg_binary
from text_to_speech.config import build_job
from text_to_speech.constants import (
    DEFAULT_VOICE,
    DEFAULT_SPEED,
    DEFAULT_MODEL,
    DEFAULT_PARALLEL,
    DEFAULT_CHUNK_SIZE,
    VERSION,
)
from text_to_speech.errors import ConfigurationError, InputError, PipelineError
from text_to_speech.pipeline import read_input_file, run


class _ArgumentParser(argparse.ArgumentParser):
    """Argument errors exit with status 1 like every other fatal error."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"Error: {message}", file=sys.stderr)
        raise SystemExit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="text-to-speech",
        description="Convert text into a single loudness-normalized MP3 using OpenAI speech synthesis",
    )
    parser.add_argument("input", nargs="?", help="Text file to read (default: standard input)")
    parser.add_argument("-o", "--output", help="Destination audio file (required)")
    parser.add_argument("--voice", help=f"Synthesis voice (default: {DEFAULT_VOICE})")
    parser.add_argument("--speed", type=float, help=f"Speed multiplier 0.25-4.0 (default: {DEFAULT_SPEED})")
    parser.add_argument("--model", help=f"Synthesis model (default: {DEFAULT_MODEL})")
    parser.add_argument("-p", "--parallel", type=int, help=f"Concurrent requests (default: {DEFAULT_PARALLEL})")
    parser.add_argument("--chunk", type=int, help=f"Target chunk size in characters (default: {DEFAULT_CHUNK_SIZE})")
    parser.add_argument("--debug-dir", help="Directory to receive a copy of all intermediate files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(format="%(asctime)s - %(levelname)s - %(name)s - %(message)s", level=level)
    if not verbose:
        for lib_name in ("httpx", "httpcore", "openai"):
            logging.getLogger(lib_name).setLevel(logging.WARNING)


def _check_ffmpeg() -> None:
    """Verify ffmpeg is installed."""
    if not shutil.which(ffmpeg_binary()):
        raise ConfigurationError("ffmpeg is required but not found on PATH.")


def read_stdin() -> str:
    """Read standard input to completion, prompting when it is a terminal."""
    if sys.stdin.isatty():
        print("No input file given. Waiting for text on standard input...", file=sys.stderr)
        print("(Press Ctrl+D to finish input)", file=sys.stderr)
    try:
        return sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Could not read standard input: {e}") from e


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    load_dotenv()
    setup_logging(args.verbose, args.quiet)

    try:
        job = build_job(
            args.output,
            voice=args.voice,
            speed=args.speed,
            model=args.model,
            parallel=args.parallel,
            chunk_size=args.chunk,
            debug_dir=args.debug_dir,
        )
        _check_ffmpeg()

        if args.input:
            print(f"Input source: file ({args.input})")
            text = read_input_file(args.input)
        else:
            print("Input source: standard input")
            text = read_stdin()

        output = run(job, text)
    except PipelineError as e:
        print(f"\nError: {e}", file=sys.stderr)
        raise SystemExit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        raise SystemExit(1)

    if output is None:
        print("No output produced: input contained no text to speak.")
