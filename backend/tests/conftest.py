import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from zonecup.database import get_session, init_db
from zonecup.main import app
from zonecup.models.team import Team

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup
# ============================================================================
# 1. A fresh sqlite:///:memory: engine per test (zone ids and the rules row are
#    fixed, so a shared database would leak state between tests)
# 2. StaticPool so every connection of that engine sees the same database
# 3. check_same_thread=False required for TestClient/threaded access
# 4. App dependency overridden to return the test session (see client_fixture)


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Test client whose requests share the test session"""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="make_teams")
def make_teams_fixture(session: Session):
    """Create teams named Team 01..Team NN with ids t01..tNN"""

    def _make(count: int):
        teams = [Team(id=f"t{i:02d}", name=f"Team {i:02d}") for i in range(1, count + 1)]
        session.add_all(teams)
        session.commit()
        return teams

    return _make
