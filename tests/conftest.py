# Ensure repository root is on sys.path for direct test execution without editable install.
import pathlib
import sys

import pytest

root = pathlib.Path(__file__).resolve().parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from make24 import create_app  # noqa: E402
from make24.config import TestConfig  # noqa: E402
from make24.db import db  # noqa: E402
from make24.games.core.game_core import SESSIONS  # noqa: E402


@pytest.fixture
def app():
    app = create_app(TestConfig)
    SESSIONS.clear()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
    SESSIONS.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()
