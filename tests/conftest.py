import pytest

from quire.db import close_db, create_tables, init_db


@pytest.fixture
def db(tmp_path):
    init_db(str(tmp_path / "quire.db"))
    create_tables()
    yield
    close_db()
