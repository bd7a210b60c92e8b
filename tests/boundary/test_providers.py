"""
Test suite for model provider factories and the fixed-dimension embeddings wrapper.

System role: Verification of provider instantiation
"""

from unittest.mock import AsyncMock, patch

import pytest

from corpus_qa.boundary.providers import create_chat_model, create_embeddings
from corpus_qa.configs.models import ModelSettings


class TestCreateChatModel:
    """Test suite for create_chat_model."""

    @patch("corpus_qa.boundary.providers.init_chat_model")
    def test_should_pass_model_provider_and_temperature(self, mock_init) -> None:
        """Test settings are forwarded to init_chat_model."""
        settings = ModelSettings(chat_provider="openai", chat_model="gpt-4o-mini", temperature=0.0)

        model = create_chat_model(settings)

        mock_init.assert_called_once_with("gpt-4o-mini", model_provider="openai", temperature=0.0)
        assert model is mock_init.return_value


class TestCreateEmbeddings:
    """Test suite for create_embeddings."""

    @patch("corpus_qa.boundary.providers.FixedDimensionEmbeddings")
    def test_should_request_configured_dimension(self, mock_embeddings_cls) -> None:
        """Test embedding model and dimensionality come from settings."""
        settings = ModelSettings(embedding_model="models/test-embedding", embedding_dimension=256)

        embeddings = create_embeddings(settings)

        mock_embeddings_cls.assert_called_once_with(
            model="models/test-embedding",
            output_dimensionality=256,
        )
        assert embeddings is mock_embeddings_cls.return_value


class TestFixedDimensionEmbeddings:
    """Test suite for FixedDimensionEmbeddings dimension injection."""

    @patch("langchain_google_genai.GoogleGenerativeAIEmbeddings.embed_documents")
    def test_embed_documents_should_inject_dimension(self, mock_parent, monkeypatch) -> None:
        """Test every document call carries output_dimensionality."""
        # Arrange
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
        from corpus_qa.boundary.embeddings_wrapper import FixedDimensionEmbeddings

        mock_parent.return_value = [[0.1, 0.2]]
        embeddings = FixedDimensionEmbeddings(output_dimensionality=2)

        # Act
        embeddings.embed_documents(["hello"])

        # Assert
        assert mock_parent.call_args.kwargs["output_dimensionality"] == 2

    @pytest.mark.asyncio
    @patch("langchain_google_genai.GoogleGenerativeAIEmbeddings.aembed_documents", new_callable=AsyncMock)
    async def test_aembed_documents_should_inject_dimension(self, mock_parent, monkeypatch) -> None:
        """Test the async path used for corpus and query embedding carries output_dimensionality."""
        # Arrange
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
        from corpus_qa.boundary.embeddings_wrapper import FixedDimensionEmbeddings

        mock_parent.return_value = [[0.1, 0.2, 0.3]]
        embeddings = FixedDimensionEmbeddings(output_dimensionality=3)

        # Act
        vectors = await embeddings.aembed_documents(["What is X?"])

        # Assert
        assert vectors == [[0.1, 0.2, 0.3]]
        assert mock_parent.await_args.kwargs["output_dimensionality"] == 3

    @patch("langchain_google_genai.GoogleGenerativeAIEmbeddings.embed_documents")
    def test_explicit_dimension_should_win(self, mock_parent, monkeypatch) -> None:
        """Test a caller-supplied dimension is not overwritten."""
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
        from corpus_qa.boundary.embeddings_wrapper import FixedDimensionEmbeddings

        embeddings = FixedDimensionEmbeddings(output_dimensionality=2)

        embeddings.embed_documents(["hello"], output_dimensionality=8)

        assert mock_parent.call_args.kwargs["output_dimensionality"] == 8
