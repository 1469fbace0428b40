"""
Tests for the recipe feed connector using a mocked requests session.

These tests never touch the network. They verify that:
- Well-formed payloads decode into Recipe objects with matching fields
- Non-2xx status codes raise ServerError carrying the code
- Malformed JSON raises DecodingError
- Invalid URLs and transport failures are classified
"""

import json
import os
from unittest.mock import Mock, patch

import pytest
import requests

from cuisine.connectors.base import (
    DecodingError,
    InvalidResponse,
    InvalidURL,
    NetworkError,
    ServerError,
)
from cuisine.connectors.recipes_connector import RECIPES_URL, RecipeConnector


FEED_URL = "https://example.com/recipes.json"


def make_session(status_code=200, content=b""):
    """Build a mock session whose get() returns a response with the given status and body."""
    response = Mock()
    response.status_code = status_code
    response.content = content
    session = Mock()
    session.get.return_value = response
    return session


def feed_bytes(recipes):
    return json.dumps({"recipes": recipes}).encode("utf-8")


class TestRecipeConnectorConfig:
    """Tests for connector construction."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults_to_production_feed(self):
        """Test that the connector defaults to the production feed and timeout."""
        connector = RecipeConnector(session=Mock())
        assert connector.base_url == RECIPES_URL
        assert connector.timeout == 10.0

    @patch.dict(os.environ, {"RECIPES_URL": "https://example.com/custom.json"})
    def test_reads_url_from_environment(self):
        """Test that RECIPES_URL sets the feed URL."""
        connector = RecipeConnector(session=Mock())
        assert connector.base_url == "https://example.com/custom.json"

    @patch.dict(os.environ, {"RECIPES_URL": "https://example.com/custom.json"})
    def test_explicit_url_wins_over_environment(self):
        """Test that an explicit URL takes precedence over RECIPES_URL."""
        connector = RecipeConnector(base_url=FEED_URL, session=Mock())
        assert connector.base_url == FEED_URL


class TestFetchRecipes:
    """Tests for fetch_recipes."""

    def test_fetch_success_decodes_all_fields(self):
        """Test that a well-formed feed decodes every field."""
        payload = [
            {
                "cuisine": "Italian",
                "name": "Pasta Carbonara",
                "photo_url_large": "https://example.com/large.jpg",
                "photo_url_small": "https://example.com/small.jpg",
                "uuid": "123e4567-e89b-12d3-a456-426614174000",
                "source_url": "https://example.com/recipe",
                "youtube_url": "https://youtube.com/watch?v=123",
            },
            {
                "cuisine": "Malaysian",
                "name": "Apam Balik",
                "uuid": "0c6ca6e7-e32a-4053-b824-1dbf749910d8",
            },
        ]
        session = make_session(200, feed_bytes(payload))
        connector = RecipeConnector(base_url=FEED_URL, session=session, timeout=5)

        recipes = connector.fetch_recipes()

        session.get.assert_called_once_with(FEED_URL, timeout=5)
        assert len(recipes) == 2
        first = recipes[0]
        assert first.name == "Pasta Carbonara"
        assert first.cuisine == "Italian"
        assert first.uuid == "123e4567-e89b-12d3-a456-426614174000"
        assert first.photo_url_large == "https://example.com/large.jpg"
        assert first.photo_url_small == "https://example.com/small.jpg"
        assert first.source_url == "https://example.com/recipe"
        assert first.youtube_url == "https://youtube.com/watch?v=123"

        # Optional fields absent from the payload decode as None
        second = recipes[1]
        assert second.name == "Apam Balik"
        assert second.photo_url_large is None
        assert second.source_url is None
        assert second.youtube_url is None

    def test_fetch_preserves_feed_order(self):
        """Test that recipes come back in feed order."""
        payload = [
            {"cuisine": "British", "name": name, "uuid": str(i)}
            for i, name in enumerate(["Bakewell Tart", "Battenberg Cake", "Apple Frangipan Tart"])
        ]
        connector = RecipeConnector(base_url=FEED_URL, session=make_session(200, feed_bytes(payload)))

        recipes = connector.fetch_recipes()

        assert [r.name for r in recipes] == ["Bakewell Tart", "Battenberg Cake", "Apple Frangipan Tart"]

    def test_fetch_empty_feed_returns_empty_list(self):
        """Test that an empty feed returns an empty list."""
        connector = RecipeConnector(base_url=FEED_URL, session=make_session(200, feed_bytes([])))
        assert connector.fetch_recipes() == []

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    def test_fetch_server_error_carries_status_code(self, status_code):
        """Test that a non-2xx status raises ServerError with the code."""
        connector = RecipeConnector(base_url=FEED_URL, session=make_session(status_code, b""))

        with pytest.raises(ServerError) as exc_info:
            connector.fetch_recipes()

        assert exc_info.value.status_code == status_code
        assert exc_info.value == ServerError(status_code)

    def test_server_error_is_an_invalid_response(self):
        """Test that ServerError can be caught as InvalidResponse."""
        connector = RecipeConnector(base_url=FEED_URL, session=make_session(500, b""))
        with pytest.raises(InvalidResponse):
            connector.fetch_recipes()

    def test_fetch_malformed_json_raises_decoding_error(self):
        """Test that malformed JSON raises DecodingError."""
        connector = RecipeConnector(base_url=FEED_URL, session=make_session(200, b"Invalid JSON"))
        with pytest.raises(DecodingError):
            connector.fetch_recipes()

    def test_fetch_wrong_shape_raises_decoding_error(self):
        """Test that a recipe missing required fields raises DecodingError."""
        # Recipe missing its required uuid
        body = feed_bytes([{"cuisine": "Italian", "name": "Pizza"}])
        connector = RecipeConnector(base_url=FEED_URL, session=make_session(200, body))
        with pytest.raises(DecodingError):
            connector.fetch_recipes()

    def test_fetch_missing_envelope_raises_decoding_error(self):
        """Test that a bare list without the envelope raises DecodingError."""
        body = json.dumps([{"cuisine": "Italian", "name": "Pizza", "uuid": "1"}]).encode()
        connector = RecipeConnector(base_url=FEED_URL, session=make_session(200, body))
        with pytest.raises(DecodingError):
            connector.fetch_recipes()

    def test_fetch_missing_status_raises_invalid_response(self):
        """Test that a response without a status raises InvalidResponse."""
        session = make_session(200, feed_bytes([]))
        session.get.return_value.status_code = None
        connector = RecipeConnector(base_url=FEED_URL, session=session)
        with pytest.raises(InvalidResponse):
            connector.fetch_recipes()

    @pytest.mark.parametrize(
        "url",
        ["not a url", "ftp://example.com/recipes.json", "/recipes.json", "http://[bad", "https://[::1"],
    )
    def test_fetch_invalid_url_raises_without_request(self, url):
        """Test that a malformed feed URL raises InvalidURL without a request."""
        session = make_session(200, feed_bytes([]))
        connector = RecipeConnector(base_url=url, session=session)

        with pytest.raises(InvalidURL):
            connector.fetch_recipes()

        session.get.assert_not_called()

    def test_fetch_connection_error_raises_invalid_response(self):
        """Test that a connection failure raises InvalidResponse."""
        session = Mock()
        session.get.side_effect = requests.exceptions.ConnectionError("connection refused")
        connector = RecipeConnector(base_url=FEED_URL, session=session)

        with pytest.raises(InvalidResponse) as exc_info:
            connector.fetch_recipes()

        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_fetch_makes_a_single_attempt(self):
        """Test that a failed fetch is not retried."""
        session = make_session(503, b"")
        connector = RecipeConnector(base_url=FEED_URL, session=session)

        with pytest.raises(NetworkError):
            connector.fetch_recipes()

        assert session.get.call_count == 1
