"""
Tests for the Gemini model client.

The genai client is replaced with a MagicMock whose
aio.models.generate_content is an AsyncMock.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from scout.services.model_client import (
    MissingCredentialError,
    ModelServiceError,
    generate_grounded_text,
)

CLIENT_PATH = "scout.services.model_client._get_gemini_client"


def _response(text=None, parts=None, grounding=None):
    response = MagicMock()
    response.text = text
    if parts is None:
        response.candidates = []
    else:
        candidate = MagicMock()
        candidate.content.parts = [MagicMock(text=p) for p in parts]
        candidate.grounding_metadata = grounding
        response.candidates = [candidate]
    return response


def _client(response=None, error=None):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return client


class TestGenerateGroundedText:

    @pytest.mark.asyncio
    async def test_missing_key_raises_before_any_call(self):
        with patch(CLIENT_PATH) as get_client:
            with pytest.raises(MissingCredentialError):
                await generate_grounded_text("prompt", api_key="")
        get_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_returns_response_text(self):
        client = _client(_response(text='{"restaurants": []}'))
        with patch(CLIENT_PATH, return_value=client):
            text = await generate_grounded_text("prompt", api_key="key")
        assert text == '{"restaurants": []}'

    @pytest.mark.asyncio
    async def test_joins_candidate_parts(self):
        client = _client(_response(text=None, parts=['{"restaurants": ', "[]}"]))
        with patch(CLIENT_PATH, return_value=client):
            text = await generate_grounded_text("prompt", api_key="key")
        assert text == '{"restaurants": []}'

    @pytest.mark.asyncio
    async def test_google_search_tool_enabled(self):
        client = _client(_response(text="{}"))
        with patch(CLIENT_PATH, return_value=client):
            await generate_grounded_text("find food", api_key="key", model="gemini-test")

        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "find food"
        config = kwargs["config"]
        assert config.system_instruction
        assert len(config.tools) == 1
        assert config.tools[0].google_search is not None
        # Grounding does not allow a JSON response mime type
        assert config.response_mime_type is None

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_service_error(self):
        client = _client(error=ConnectionError("network down"))
        with patch(CLIENT_PATH, return_value=client):
            with pytest.raises(ModelServiceError):
                await generate_grounded_text("prompt", api_key="key")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, "", "   \n"])
    async def test_empty_text_is_service_error(self, text):
        client = _client(_response(text=text))
        with patch(CLIENT_PATH, return_value=client):
            with pytest.raises(ModelServiceError, match="No content generated"):
                await generate_grounded_text("prompt", api_key="key")

    @pytest.mark.asyncio
    async def test_grounding_metadata_is_tolerated(self):
        grounding = MagicMock()
        grounding.web_search_queries = ["best restaurants lisbon"]
        chunk = MagicMock()
        chunk.web.title = "Time Out"
        chunk.web.uri = "https://timeout.com/lisbon"
        grounding.grounding_chunks = [chunk]

        client = _client(_response(text=None, parts=["{}"], grounding=grounding))
        with patch(CLIENT_PATH, return_value=client):
            assert await generate_grounded_text("prompt", api_key="key") == "{}"
