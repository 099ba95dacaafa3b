from __future__ import annotations

from app.core.config import DB_FILENAME, Settings


def test_explicit_database_url_wins(tmp_path):
    settings = Settings(database_url="sqlite:///explicit.db", env="prod", shared_db_dir=tmp_path)

    assert settings.resolved_database_url() == "sqlite:///explicit.db"


def test_shared_directory_used_outside_dev(tmp_path):
    shared = tmp_path / "share"
    shared.mkdir()
    settings = Settings(database_url=None, env="prod", shared_db_dir=shared, local_db_dir=tmp_path / "local")

    assert settings.resolved_database_url() == f"sqlite:///{shared / DB_FILENAME}"


def test_falls_back_to_local_when_share_missing(tmp_path):
    local = tmp_path / "local"
    settings = Settings(database_url=None, env="prod", shared_db_dir=tmp_path / "offline", local_db_dir=local)

    assert settings.resolved_database_url() == f"sqlite:///{local / DB_FILENAME}"


def test_dev_never_uses_shared_directory(tmp_path):
    settings = Settings(database_url=None, env="dev", shared_db_dir=tmp_path, local_db_dir=tmp_path / "local")

    assert settings.resolved_database_url().endswith(f"local/{DB_FILENAME}")


def test_cors_origins_from_comma_string():
    settings = Settings(cors_origins="http://localhost:3000, http://example.com")

    assert [str(o).rstrip("/") for o in settings.cors_origins] == ["http://localhost:3000", "http://example.com"]
