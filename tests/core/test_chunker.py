"""
Test suite for Chunker and FixedWindowTextSplitter.

Covers fixed-window geometry, overlap invariants, structured records,
determinism and configuration validation.

System role: Verification of corpus chunking
"""

import pytest
from langchain_core.documents import Document

from corpus_qa.core.chunker import Chunker, FixedWindowTextSplitter, validate_window
from corpus_qa.core.exceptions import ConfigurationError, InvalidInputError
from corpus_qa.models.corpus import ChunkingStrategy, QARecord


@pytest.fixture
def text_2500() -> str:
    """Provide 2500 characters with position-dependent content."""
    return "".join(chr(ord("a") + (i % 26)) for i in range(2500))


class TestFixedWindowChunking:
    """Test suite for fixed-window chunking."""

    def test_2500_chars_should_produce_three_chunks_at_0_900_1800(self, text_2500: str) -> None:
        """Test 2500 chars, size 1000, overlap 100 gives windows at 0, 900 and 1800."""
        # Arrange
        chunker = Chunker(chunk_size=1000, chunk_overlap=100)

        # Act
        chunks = chunker.chunk_text(text_2500, "doc.txt")

        # Assert
        assert len(chunks) == 3
        assert chunks[0].text == text_2500[0:1000]
        assert chunks[1].text == text_2500[900:1900]
        assert chunks[2].text == text_2500[1800:2500]
        assert [c.source_ref for c in chunks] == ["doc.txt#0", "doc.txt#900", "doc.txt#1800"]

    def test_last_chunk_may_be_shorter(self, text_2500: str) -> None:
        """Test final window is truncated at end of text."""
        chunks = Chunker(chunk_size=1000, chunk_overlap=100).chunk_text(text_2500, "doc.txt")

        assert len(chunks[-1].text) == 700

    @pytest.mark.parametrize(
        ("size", "overlap", "length"),
        [(10, 3, 95), (50, 0, 200), (7, 6, 40), (100, 25, 101), (1000, 100, 2500)],
    )
    def test_consecutive_chunks_should_share_exactly_overlap_chars(
        self, size: int, overlap: int, length: int
    ) -> None:
        """Test every chunk after the first starts with the previous chunk's last `overlap` chars."""
        # Arrange
        text = "".join(chr(ord("A") + (i * 7 % 26)) for i in range(length))
        chunker = Chunker(chunk_size=size, chunk_overlap=overlap)

        # Act
        chunks = chunker.chunk_text(text, "doc")

        # Assert
        for previous, current in zip(chunks, chunks[1:]):
            assert len(previous.text) == size
            if overlap:
                assert current.text[:overlap] == previous.text[-overlap:]
        assert "".join(
            [chunks[0].text] + [c.text[overlap:] for c in chunks[1:]]
        ) == text

    def test_text_shorter_than_window_should_produce_single_chunk(self) -> None:
        """Test short text yields one chunk equal to the text."""
        chunks = Chunker(chunk_size=1000, chunk_overlap=100).chunk_text("short text", "doc")

        assert len(chunks) == 1
        assert chunks[0].text == "short text"

    def test_text_of_exactly_chunk_size_should_produce_single_chunk(self) -> None:
        """Test no trailing overlap-only window is emitted."""
        chunks = Chunker(chunk_size=10, chunk_overlap=3).chunk_text("x" * 10, "doc")

        assert len(chunks) == 1

    def test_empty_text_should_produce_no_chunks(self) -> None:
        """Test empty input yields an empty list."""
        assert Chunker().chunk_text("", "doc") == []

    def test_chunking_should_be_deterministic(self, text_2500: str) -> None:
        """Test identical input and config yield identical chunks and ids."""
        first = Chunker(chunk_size=300, chunk_overlap=30).chunk_text(text_2500, "doc")
        second = Chunker(chunk_size=300, chunk_overlap=30).chunk_text(text_2500, "doc")

        assert first == second
        assert [c.id for c in first] == [c.id for c in second]

    def test_chunks_should_be_immutable(self) -> None:
        """Test Chunk cannot be mutated after creation."""
        chunk = Chunker().chunk_text("some text", "doc")[0]

        with pytest.raises(Exception):
            chunk.text = "changed"  # type: ignore[misc]


class TestStructuredChunking:
    """Test suite for structured-record chunking."""

    def test_each_record_should_become_one_chunk(self) -> None:
        """Test records map one-to-one onto newline-joined chunks."""
        # Arrange
        records = [
            QARecord(question="What is X?", answer="X is a thing."),
            QARecord(question="What is Y?", answer="Y is another thing." * 200),
        ]
        chunker = Chunker(strategy=ChunkingStrategy.STRUCTURED_RECORD, chunk_size=100, chunk_overlap=10)

        # Act
        chunks = chunker.chunk_records(records, "qa.json")

        # Assert
        assert len(chunks) == 2
        assert chunks[0].text == "What is X?\nX is a thing."
        assert chunks[1].text.startswith("What is Y?\n")
        assert chunks[0].source_ref == "qa.json#record-0"
        assert chunks[0].id != chunks[1].id

    def test_chunk_should_dispatch_on_strategy(self) -> None:
        """Test chunk() routes records to structured mode."""
        chunker = Chunker(strategy=ChunkingStrategy.STRUCTURED_RECORD)

        chunks = chunker.chunk([QARecord(q="Q?", a="A.")], "qa.json")

        assert [c.text for c in chunks] == ["Q?\nA."]

    def test_chunk_should_reject_text_for_structured_strategy(self) -> None:
        """Test mismatched content raises InvalidInputError."""
        chunker = Chunker(strategy=ChunkingStrategy.STRUCTURED_RECORD)

        with pytest.raises(InvalidInputError):
            chunker.chunk("raw text", "qa.json")

    def test_chunk_should_reject_records_for_fixed_window_strategy(self) -> None:
        """Test records passed to fixed-window chunker raise InvalidInputError."""
        chunker = Chunker(strategy=ChunkingStrategy.FIXED_WINDOW)

        with pytest.raises(InvalidInputError):
            chunker.chunk([QARecord(question="Q", answer="A")], "raw.txt")


class TestWindowValidation:
    """Test suite for chunk size/overlap validation."""

    @pytest.mark.parametrize(("size", "overlap"), [(100, 100), (100, 150), (0, 0), (10, -1)])
    def test_invalid_window_should_raise_configuration_error(self, size: int, overlap: int) -> None:
        """Test overlap >= size, non-positive size and negative overlap are rejected."""
        with pytest.raises(ConfigurationError):
            Chunker(chunk_size=size, chunk_overlap=overlap)

    def test_validation_error_should_name_setting(self) -> None:
        """Test error details carry the offending setting."""
        with pytest.raises(ConfigurationError) as exc_info:
            validate_window(100, 100)

        assert exc_info.value.details["setting"] == "chunk_overlap"


class TestFixedWindowTextSplitter:
    """Test suite for the LangChain splitter integration."""

    def test_split_documents_should_preserve_metadata(self) -> None:
        """Test splitter works inside LangChain document pipelines."""
        # Arrange
        splitter = FixedWindowTextSplitter(chunk_size=10, chunk_overlap=2)
        documents = [Document(page_content="0123456789abcdefghij", metadata={"source": "s"})]

        # Act
        split = splitter.split_documents(documents)

        # Assert
        assert [d.page_content for d in split] == ["0123456789", "89abcdefgh", "ghij"]
        assert all(d.metadata["source"] == "s" for d in split)

    def test_step_should_be_size_minus_overlap(self) -> None:
        """Test step property."""
        assert FixedWindowTextSplitter(chunk_size=1000, chunk_overlap=100).step == 900
