import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from openbill.database import Base, get_db
from openbill.main import app

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def team_code(client):
    res = client.post("/api/groups", json={"name": "Trip", "member_name": "Alice"})
    code = res.json()["team_code"]
    client.post("/api/groups/join", json={"team_code": code, "member_name": "Bob"})
    client.post("/api/groups/join", json={"team_code": code, "member_name": "Carol"})
    return code


@pytest.fixture
def add_expense(client, team_code):
    def _add(amount, paid_by, split_between=None, description="Expense"):
        payload = {
            "team_code": team_code, "description": description,
            "amount": amount, "paid_by": paid_by,
        }
        if split_between is not None:
            payload["split_between"] = split_between
        res = client.post("/api/expenses", json=payload)
        assert res.status_code == 200, res.text
        return res.json()
    return _add
