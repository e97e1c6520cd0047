"""Shared pytest fixtures for the analysis pipeline tests."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from states import MediaFile
from utils.config import BYTES_PER_MB, AnalyzerConfig


def make_media(name: str, size_mb: float = 0, mime_type: str = "video/mp4", data: bytes | None = None) -> MediaFile:
    if data is not None:
        return MediaFile.from_bytes(name, data, mime_type)
    size = int(size_mb * BYTES_PER_MB)
    # Declared size drives validation; the payload itself stays tiny
    return MediaFile(name=name, size=size, mime_type=mime_type, loader=lambda: f"{name}-bytes".encode())


def fake_genai_client(text: str | None = "Overview\n...", error: Exception | None = None) -> SimpleNamespace:
    generate = AsyncMock(return_value=SimpleNamespace(text=text))
    if error is not None:
        generate.side_effect = error
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))


@pytest.fixture()
def config() -> AnalyzerConfig:
    return AnalyzerConfig(api_key="test-key")


@pytest.fixture(autouse=True)
def _clear_api_key_env(monkeypatch: pytest.MonkeyPatch):
    for var in ("GOOGLE_API_KEY", "GEMINI_API_KEY", "API_KEY", "APPFEATURE_MODEL"):
        monkeypatch.delenv(var, raising=False)
