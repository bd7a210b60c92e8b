"""
Corpus source loading.

Resolves corpus selectors to registered files and reads them fully:
raw text for fixed-window sources, JSON question/answer records for
structured sources.

Dependencies: json, pathlib, pydantic, corpus_qa.models.corpus
System role: Corpus file boundary
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from corpus_qa.configs.rag import CorpusSourceSettings
from corpus_qa.core.exceptions import ConfigurationError, InvalidInputError
from corpus_qa.models.corpus import ChunkingStrategy, CorpusSource, QARecord
from corpus_qa.observability.log_utils import preview

logger = logging.getLogger(__name__)

_QA_RECORDS = TypeAdapter(list[QARecord])


class CorpusRegistry:
    """Selector -> corpus source lookup."""

    def __init__(self, sources: Mapping[str, CorpusSourceSettings], base_dir: str | Path | None = None) -> None:
        """
        Initialize registry.

        Args:
            sources: Selector to source settings mapping
            base_dir: Directory relative paths resolve against (cwd when None)
        """
        self._base_dir = Path(base_dir) if base_dir is not None else None
        self._sources = {
            selector: CorpusSource(selector=selector, path=source.path, strategy=source.strategy)
            for selector, source in sources.items()
        }

    @property
    def selectors(self) -> list[str]:
        return sorted(self._sources)

    def resolve(self, selector: str | None) -> CorpusSource:
        """
        Look up the source registered under selector.

        Raises:
            InvalidInputError: When selector is empty or unknown
        """
        if not selector:
            raise InvalidInputError("Corpus selector is required", field="fonte")
        source = self._sources.get(selector)
        if source is None:
            raise InvalidInputError(
                f"Unknown corpus selector: {selector}",
                field="fonte",
                details={"valid_selectors": self.selectors},
            )
        return source

    def path_for(self, source: CorpusSource) -> Path:
        path = Path(source.path)
        if self._base_dir is not None and not path.is_absolute():
            path = self._base_dir / path
        return path


def load_corpus(source: CorpusSource, path: Path | None = None) -> str | list[QARecord]:
    """
    Read a corpus file fully.

    Args:
        source: Registered corpus source
        path: Resolved file path (source.path when omitted)

    Returns:
        str | list[QARecord]: Raw text or structured records, by strategy

    Raises:
        ConfigurationError: When the registered file is missing or malformed
    """
    path = path or Path(source.path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Corpus file for selector '{source.selector}' cannot be read",
            setting="corpus_sources",
            details={"selector": source.selector, "path": str(path), "error_type": type(e).__name__},
        ) from e

    logger.info(f"{__name__}:load_corpus - selector={source.selector}, path={path}, chars={len(content)}")
    logger.debug(f"{__name__}:load_corpus - content={preview(content, 500)}")

    if source.strategy is ChunkingStrategy.FIXED_WINDOW:
        return content

    try:
        return _QA_RECORDS.validate_python(json.loads(content))
    except (json.JSONDecodeError, PydanticValidationError) as e:
        raise ConfigurationError(
            f"Corpus for selector '{source.selector}' is not a list of question/answer records",
            setting="corpus_sources",
            details={"selector": source.selector, "path": str(path), "error_type": type(e).__name__},
        ) from e
