import pytest
from fastapi.testclient import TestClient

from quire.db import create_user


@pytest.fixture
def client(tmp_path, monkeypatch):
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        """
language = "en"
languages = ["en", "nl"]

[[projects]]
name = "demo"
environments = ["live", "staging"]

[[projects]]
name = "blog"
""",
        encoding="utf-8",
    )

    monkeypatch.setenv("CONFIG_FILE", str(config_file))
    monkeypatch.setenv("QUIRE_DB_PATH", str(tmp_path / "quire.db"))

    from quire.api import create_app

    app = create_app()
    with TestClient(app) as client:
        create_user("admin", token="tok-admin", is_admin=True)
        create_user("writer", token="tok-writer", scopes={"demo": ["content", "connections"]})
        client.cookies.set("token", "tok-admin")
        yield client
