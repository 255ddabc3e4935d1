"""
API tests for the scorer and spectator endpoints.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import get_db, init_db
from main import app


@pytest.fixture
def client():
    """Test client backed by a shared in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def match_id(client):
    """Two registered teams with players and a scheduled 2-over match"""
    royals = client.post("/api/teams", json={"name": "Regina Royals", "short_name": "RR"}).json()
    stars = client.post("/api/teams", json={"name": "Saskatoon Stars", "short_name": "SS"}).json()
    for name in ["Amit Patel", "Rahul Sharma", "Dev Shah"]:
        client.post(f"/api/teams/{royals['id']}/players", json={"name": name, "role": "batsman"})
    for name in ["Sanjay Varma", "Kiran Rao"]:
        client.post(f"/api/teams/{stars['id']}/players", json={"name": name, "role": "bowler"})

    response = client.post("/api/matches", json={
        "team_a_id": royals["id"],
        "team_b_id": stars["id"],
        "max_overs": 2,
        "venue": "Regina",
    })
    assert response.status_code == 200
    return response.json()["id"]


def ball(client, match_id, **payload):
    return client.post(f"/api/matches/{match_id}/ball", json=payload)


class TestRoster:
    def test_teams_and_players(self, client, match_id):
        teams = client.get("/api/teams").json()
        assert [t["short_name"] for t in teams] == ["RR", "SS"]
        players = client.get(f"/api/teams/{teams[0]['id']}/players").json()
        assert [p["name"] for p in players] == ["Amit Patel", "Rahul Sharma", "Dev Shah"]

    def test_unknown_team(self, client):
        response = client.post("/api/teams/9/players", json={"name": "Nobody"})
        assert response.status_code == 404


class TestScoring:
    def test_scheduled_match(self, client, match_id):
        match = client.get(f"/api/matches/{match_id}").json()
        assert match["status"] == "UPCOMING"
        assert match["innings"] == []
        assert match["max_overs"] == 2

    def test_ball_before_start_conflicts(self, client, match_id):
        assert ball(client, match_id, runs=1).status_code == 409

    def test_ball_without_players_conflicts(self, client, match_id):
        client.post(f"/api/matches/{match_id}/start", json={"batting_team_id": 1})
        response = ball(client, match_id, runs=1)
        assert response.status_code == 409
        assert "striker" in response.json()["detail"]

    def test_invalid_ball_rejected(self, client, match_id):
        assert ball(client, match_id, runs=9).status_code == 422
        assert ball(client, match_id, runs=1, extra_type="overthrow").status_code == 422

    def test_unknown_match(self, client):
        assert client.get("/api/matches/99").status_code == 404
        assert ball(client, 99, runs=1).status_code == 404

    def test_live_scoreboard(self, client, match_id):
        client.post(f"/api/matches/{match_id}/start", json={"batting_team_id": 1})
        client.post(f"/api/matches/{match_id}/players", json={
            "striker_id": 1, "non_striker_id": 2, "current_bowler_id": 4,
        })
        ball(client, match_id, runs=1)
        ball(client, match_id, runs=4)
        ball(client, match_id, runs=0, extra_type="wide")
        board = ball(client, match_id, runs=2, extra_type="no-ball").json()

        assert board["status"] == "LIVE"
        assert board["batting_team_name"] == "Regina Royals"
        assert board["runs"] == 9
        assert board["overs"] == "0.2"
        assert board["extras"] == 2
        assert board["this_over"] == ["1", "4", "Wd", "2Nb"]
        assert board["striker"]["name"] == "Rahul Sharma"
        assert board["striker"]["runs"] == 6
        assert board["bowler"]["runs"] == 9
        assert board["balls_remaining"] == 10
        assert board["innings_complete"] is False

    def test_full_match(self, client, match_id):
        client.post(f"/api/matches/{match_id}/start", json={"batting_team_id": 1})
        client.post(f"/api/matches/{match_id}/players", json={
            "striker_id": 1, "non_striker_id": 2, "current_bowler_id": 4,
        })
        for runs in [6, 6, 0, 0, 0, 0]:
            ball(client, match_id, runs=runs)
        client.post(f"/api/matches/{match_id}/players", json={"current_bowler_id": 5})
        for _ in range(6):
            board = ball(client, match_id, runs=0).json()
        assert board["innings_complete"] is True
        assert ball(client, match_id, runs=1).status_code == 409

        board = client.post(f"/api/matches/{match_id}/innings/end").json()
        assert board["innings"] == 2
        assert board["target"] == 13
        assert board["first_innings_score"] == "RR 12/0 (2.0)"

        client.post(f"/api/matches/{match_id}/players", json={
            "striker_id": 4, "non_striker_id": 5, "current_bowler_id": 3,
        })
        ball(client, match_id, runs=4)
        board = ball(client, match_id, is_wicket=True, wicket_type="caught").json()
        assert board["wickets"] == 1
        assert board["required_rate"] == 5.4

        # dismissed striker must be replaced before the next ball
        assert ball(client, match_id, runs=1).status_code == 409

        result = client.post(f"/api/matches/{match_id}/complete").json()
        assert result["status"] == "COMPLETED"
        assert result["winner_id"] == 1
        assert result["result_summary"] == "Regina Royals won by 8 runs"
        assert result["innings"][1]["batsmen_stats"][0]["dismissal"] == "caught"

        listing = client.get("/api/matches", params={"status": "COMPLETED"}).json()
        assert listing[0]["scores"] == ["RR 12/0 (2.0)", "SS 4/1 (0.2)"]
        assert client.post(f"/api/matches/{match_id}/complete").status_code == 409

    def test_end_innings_twice_conflicts(self, client, match_id):
        client.post(f"/api/matches/{match_id}/start", json={"batting_team_id": 2})
        assert client.post(f"/api/matches/{match_id}/innings/end").status_code == 200
        assert client.post(f"/api/matches/{match_id}/innings/end").status_code == 409


def test_health(client):
    assert client.get("/api/health").json() == {"status": "healthy"}
