"""
Tests for the composition root and the HTTP entrypoint.
"""

import pytest
from fastapi.testclient import TestClient

from stockbot.application.services.command_router import CommandRouter, START_TEXT
from stockbot.infrastructure.config.settings import load_settings
from stockbot.infrastructure.entrypoints.composition import build_command_router
from stockbot.infrastructure.entrypoints.fastapi_app import create_app


@pytest.fixture
def settings(tmp_path, symbols_csv):
    return load_settings(
        _env_file=None,
        telegram_bot_token="123:abc",
        market_api_key="key",
        symbols_csv_path=symbols_csv,
        usage_store_path=tmp_path / "counts.properties",
        feedback_path=tmp_path / "feedback.txt",
    )


class TestComposition:
    def test_wires_a_working_router(self, settings):
        router = build_command_router(settings)

        assert isinstance(router, CommandRouter)
        assert router.handle(1, "/start") == START_TEXT
        assert settings.usage_store_path.exists()

    def test_feedback_goes_to_the_configured_file(self, settings):
        build_command_router(settings).handle(9, "/feedback nice")

        assert settings.feedback_path.read_text(encoding="utf-8") == "Feedback from 9: nice\n"

    def test_missing_dataset_aborts_startup(self, settings, tmp_path):
        broken = settings.model_copy(update={"symbols_csv_path": tmp_path / "nope.csv"})
        with pytest.raises(FileNotFoundError):
            build_command_router(broken)


class TestFastAPIApp:
    @pytest.fixture
    def client(self, router):
        return TestClient(create_app(router))

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_message_is_routed(self, client):
        response = client.post("/messages", json={"user_id": 7, "text": "Apple"})

        assert response.status_code == 200
        assert response.json() == {"reply": "Stock: AAPL\nLast Price: 150.00$\nDaily Change: +50.00%"}

    def test_command_is_routed(self, client):
        response = client.post("/messages", json={"user_id": 7, "text": "/start"})
        assert response.json()["reply"] == START_TEXT

    @pytest.mark.parametrize("body", [{"text": "AAPL"}, {"user_id": "abc", "text": "AAPL"}, {"user_id": 1}])
    def test_invalid_body_is_rejected(self, client, body):
        assert client.post("/messages", json=body).status_code == 422
