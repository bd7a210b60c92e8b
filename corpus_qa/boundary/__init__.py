"""
Boundary layer.

Corpus file loading and model provider construction.
"""

from corpus_qa.boundary.corpus_loader import CorpusRegistry, load_corpus

__all__ = ["CorpusRegistry", "load_corpus"]
