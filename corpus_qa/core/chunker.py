"""
Corpus chunking.

Splits raw text into overlapping fixed-size windows, or maps structured
question/answer records one-to-one onto chunks.

Dependencies: langchain_text_splitters, hashlib, corpus_qa.models
System role: First stage of the ingestion pipeline
"""

import hashlib
import logging

from langchain_text_splitters import TextSplitter

from corpus_qa.core.exceptions import ConfigurationError, InvalidInputError
from corpus_qa.models.chunk import Chunk
from corpus_qa.models.corpus import ChunkingStrategy, QARecord

logger = logging.getLogger(__name__)


def validate_window(chunk_size: int, chunk_overlap: int) -> None:
    """
    Check fixed-window parameters.

    Raises:
        ConfigurationError: When size/overlap cannot produce progressing windows
    """
    if chunk_size <= 0:
        raise ConfigurationError(
            f"chunk_size must be positive, got {chunk_size}",
            setting="chunk_size",
        )
    if chunk_overlap < 0:
        raise ConfigurationError(
            f"chunk_overlap must not be negative, got {chunk_overlap}",
            setting="chunk_overlap",
        )
    if chunk_overlap >= chunk_size:
        raise ConfigurationError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})",
            setting="chunk_overlap",
            details={"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
        )


class FixedWindowTextSplitter(TextSplitter):
    """Character windows of chunk_size, consecutive windows sharing chunk_overlap."""

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 100, **kwargs) -> None:
        validate_window(chunk_size, chunk_overlap)
        kwargs.setdefault("strip_whitespace", False)
        super().__init__(chunk_size=chunk_size, chunk_overlap=chunk_overlap, **kwargs)

    @property
    def step(self) -> int:
        """Distance between the starts of consecutive windows."""
        return self._chunk_size - self._chunk_overlap

    def split_text(self, text: str) -> list[str]:
        windows: list[str] = []
        start = 0
        while start < len(text):
            end = start + self._chunk_size
            windows.append(text[start:end])
            if end >= len(text):
                break
            start += self.step
        return windows


class Chunker:
    """Deterministic chunker for both corpus shapes."""

    def __init__(
        self,
        strategy: ChunkingStrategy = ChunkingStrategy.FIXED_WINDOW,
        chunk_size: int = 1000,
        chunk_overlap: int = 100,
    ) -> None:
        """
        Initialize chunker.

        Args:
            strategy: Chunking strategy applied by chunk()
            chunk_size: Window size in characters (fixed-window mode)
            chunk_overlap: Characters shared between consecutive windows

        Raises:
            ConfigurationError: When chunk_overlap >= chunk_size
        """
        self.strategy = ChunkingStrategy(strategy)
        self._splitter = FixedWindowTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )

    @property
    def splitter(self) -> FixedWindowTextSplitter:
        """LangChain-compatible splitter performing the windowing."""
        return self._splitter

    def chunk(self, content: str | list[QARecord], source_ref: str) -> list[Chunk]:
        """
        Chunk corpus content using the configured strategy.

        Args:
            content: Raw text (fixed_window) or QA records (structured_record)
            source_ref: Name of the originating document

        Returns:
            list[Chunk]: Chunks in corpus order

        Raises:
            InvalidInputError: When content does not match the strategy
        """
        if self.strategy is ChunkingStrategy.FIXED_WINDOW:
            if not isinstance(content, str):
                raise InvalidInputError(
                    "fixed_window chunking expects raw text",
                    field="corpus",
                    details={"source_ref": source_ref},
                )
            return self.chunk_text(content, source_ref)

        if isinstance(content, str):
            raise InvalidInputError(
                "structured_record chunking expects question/answer records",
                field="corpus",
                details={"source_ref": source_ref},
            )
        return self.chunk_records(content, source_ref)

    def chunk_text(self, raw_text: str, source_ref: str) -> list[Chunk]:
        """
        Split raw text into overlapping fixed-size windows.

        Window i starts at character i * (chunk_size - chunk_overlap); the
        last window may be shorter than chunk_size.

        Args:
            raw_text: Full document text
            source_ref: Name of the originating document

        Returns:
            list[Chunk]: Windows in text order
        """
        windows = self._splitter.split_text(raw_text)
        step = self._splitter.step

        chunks = []
        for index, window in enumerate(windows):
            start = index * step
            chunks.append(self._build_chunk(window, f"{source_ref}#{start}"))

        logger.info(
            f"{__name__}:chunk_text - source={source_ref}, chars={len(raw_text)}, chunks={len(chunks)}"
        )
        return chunks

    def chunk_records(self, records: list[QARecord], source_ref: str) -> list[Chunk]:
        """
        Map each question/answer record to exactly one chunk.

        Args:
            records: Structured corpus records
            source_ref: Name of the originating document

        Returns:
            list[Chunk]: One chunk per record, text "question\\nanswer"
        """
        chunks = [
            self._build_chunk(
                f"{record.question}\n{record.answer}",
                f"{source_ref}#record-{index}",
            )
            for index, record in enumerate(records)
        ]
        logger.info(
            f"{__name__}:chunk_records - source={source_ref}, records={len(records)}"
        )
        return chunks

    def _build_chunk(self, text: str, source_ref: str) -> Chunk:
        return Chunk(id=self._generate_chunk_id(text, source_ref), text=text, source_ref=source_ref)

    def _generate_chunk_id(self, text: str, source_ref: str) -> str:
        """
        Generate deterministic chunk ID from content and origin.

        Returns:
            str: Truncated SHA-256 hash of source_ref + text
        """
        hash_input = f"{source_ref}:{text}"
        return hashlib.sha256(hash_input.encode()).hexdigest()[:16]
