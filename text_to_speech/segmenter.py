"""Split input text into bounded-size chunks."""

from langchain_text_splitters import RecursiveCharacterTextSplitter

from text_to_speech.constants import CHUNK_SEPARATORS, DEFAULT_CHUNK_SIZE
from text_to_speech.models import Chunk


def split_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    separators: tuple[str, ...] | list[str] = tuple(CHUNK_SEPARATORS),
) -> list[Chunk]:
    """Split text on the highest-priority separator that fits chunk_size.

    Pieces are trimmed and empty ones dropped; indices are reassigned so
    they stay contiguous from 0.
    """
    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=0,
        separators=list(separators),
        length_function=len,
        is_separator_regex=False,
    )
    pieces = [piece.strip() for piece in splitter.split_text(text)]
    return [Chunk(index=i, text=piece) for i, piece in enumerate(p for p in pieces if p)]
