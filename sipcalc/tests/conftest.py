from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from sipcalc.app import create_app


@pytest.fixture()
def db_path(tmp_path) -> str:
    return str(tmp_path / "sipcalc.db")


@pytest.fixture()
def app(db_path) -> Flask:
    flask_app = create_app(db_path=db_path)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
