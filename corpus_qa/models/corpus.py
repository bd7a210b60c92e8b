"""
Corpus domain models.

Dependencies: pydantic
System role: Structured corpus records and source descriptors
"""

from enum import Enum

from pydantic import AliasChoices, BaseModel, Field


class ChunkingStrategy(str, Enum):
    """How a corpus source is turned into chunks."""

    FIXED_WINDOW = "fixed_window"
    STRUCTURED_RECORD = "structured_record"


class QARecord(BaseModel):
    """Question/answer pair from a structured corpus."""

    question: str = Field(validation_alias=AliasChoices("question", "q"))
    answer: str = Field(validation_alias=AliasChoices("answer", "a"))


class CorpusSource(BaseModel):
    """Corpus file registered under a selector."""

    selector: str
    path: str
    strategy: ChunkingStrategy
