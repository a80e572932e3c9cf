import os
import pytest


@pytest.fixture(scope="session", autouse=True)
def set_test_env(tmp_path_factory):
    db_file = tmp_path_factory.mktemp("data") / "test.db"
    os.environ["DB_PATH"] = str(db_file)
    os.environ["MEAL_CALENDAR_PERSISTENCE"] = "sqlite"
    os.environ["MEAL_CALENDAR_HOLIDAYS"] = "2024-03-20"


@pytest.fixture(scope="session")
def client(set_test_env):
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture
def gateway():
    from meal_calendar.core.persistence import MemoryGateway
    return MemoryGateway()


@pytest.fixture
def planner(gateway):
    from meal_calendar.core.planner import Planner
    return Planner.open(gateway)
