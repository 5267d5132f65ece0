"""Shared pytest fixtures for Retouch tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from retouch.core.config import RetouchConfig
from retouch.core.encoding import ImagePayload
from retouch.ui.models import EditorState

from fakes import FakeEditAdapter, make_image_bytes

CREDENTIAL_ENV_VARS = ("API_KEY", "RETOUCH_API_KEY", "GEMINI_API_KEY")


@pytest.fixture(autouse=True)
def clear_credential_env(monkeypatch):
    """Keep real credentials in the environment out of the tests."""
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> RetouchConfig:
    """Configuration with a dummy credential and no .env file."""
    return RetouchConfig(api_key="test-key", model_id="test-image-model", _env_file=None)


@pytest.fixture
def unconfigured_config() -> RetouchConfig:
    """Configuration without any credential."""
    return RetouchConfig(_env_file=None)


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def png_payload(png_bytes: bytes) -> ImagePayload:
    return ImagePayload(data=png_bytes, media_type="image/png")


@pytest.fixture
def result_payload() -> ImagePayload:
    return ImagePayload(data=make_image_bytes("PNG", color=(0, 0, 0)), media_type="image/png")


@pytest.fixture
def png_file(temp_dir: Path, png_bytes: bytes) -> Path:
    path = temp_dir / "photo.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture
def jpeg_file(temp_dir: Path) -> Path:
    path = temp_dir / "photo.jpg"
    path.write_bytes(make_image_bytes("JPEG"))
    return path


@pytest.fixture
def gif_file(temp_dir: Path) -> Path:
    path = temp_dir / "anim.gif"
    path.write_bytes(make_image_bytes("GIF"))
    return path


@pytest.fixture
def corrupt_file(temp_dir: Path) -> Path:
    path = temp_dir / "broken.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\nnot really a png")
    return path


@pytest.fixture
def editor_state(png_payload: ImagePayload) -> EditorState:
    """Editor state with an original image and an instruction."""
    return EditorState(original=png_payload, instruction="Put a black blazer on")


@pytest.fixture
def fake_adapter(test_config: RetouchConfig, result_payload: ImagePayload) -> FakeEditAdapter:
    return FakeEditAdapter(test_config, result=result_payload)
