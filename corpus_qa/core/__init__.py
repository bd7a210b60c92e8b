"""
Core RAG pipeline.

Chunking, embedding, in-memory vector search, grounded answer generation
and usage accounting.
"""

from corpus_qa.core.answer_chain import AnswerChain
from corpus_qa.core.chunker import Chunker, FixedWindowTextSplitter
from corpus_qa.core.embedder import Embedder
from corpus_qa.core.retriever import Retriever
from corpus_qa.core.usage import UsageAccountant, estimate_cost
from corpus_qa.core.vector_index import VectorIndex, cosine_similarity

__all__ = [
    "AnswerChain",
    "Chunker",
    "Embedder",
    "FixedWindowTextSplitter",
    "Retriever",
    "UsageAccountant",
    "VectorIndex",
    "cosine_similarity",
    "estimate_cost",
]
