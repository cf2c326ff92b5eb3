"""Pytest configuration for backend tests.

Every test gets an application over fresh storage under tmp_path.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path so `web.backend` is importable without installing
project_root = Path(__file__).parent.parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tunebox.core.config import Config, ServerConfig, StorageConfig, UploadConfig
from web.backend.main import create_app


@pytest.fixture
def config(tmp_path: Path) -> Config:
    public_dir = tmp_path / "public"
    public_dir.mkdir()
    (public_dir / "index.html").write_text("<h1>Tunebox</h1>", encoding="utf-8")

    return Config(
        server=ServerConfig(allowed_origins=["http://localhost:5173"]),
        storage=StorageConfig(
            data_dir=str(tmp_path / "store"),
            public_dir=str(public_dir),
        ),
        upload=UploadConfig(max_files=10, max_file_size_mb=1),
    )


@pytest.fixture
def app(config: Config):
    return create_app(config)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def upload(client: TestClient):
    """Post files to the upload endpoint as (filename, content, content_type) tuples."""

    def _upload(*files: tuple[str, bytes, str]):
        return client.post(
            "/api/music/upload",
            files=[("musicFiles", f) for f in files],
        )

    return _upload
