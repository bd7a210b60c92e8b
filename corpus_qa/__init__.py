"""
Corpus Q&A: retrieval-augmented answering over a private text corpus.
"""

__version__ = "0.1.0"
