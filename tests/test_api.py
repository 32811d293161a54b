"""Tests for the HTTP API with a mocked database."""

from unittest.mock import MagicMock, Mock, patch

from fastapi.testclient import TestClient

from py_polisim.api.main import app
from py_polisim.core.campaign import start_campaign


def _session(mock_db):
    session = MagicMock()
    mock_db.get_session.return_value.__enter__.return_value = session
    mock_db.get_session.return_value.__exit__.return_value = False
    return session


class TestAPIEndpoints:
    """Endpoints backed by the campaign controller."""

    def setup_method(self):
        self.client = TestClient(app)

    def test_root(self):
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    @patch("py_polisim.api.main.db")
    def test_health(self, mock_db):
        _session(mock_db)
        response = self.client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @patch("py_polisim.api.main.db")
    def test_health_uninitialized_database(self, mock_db):
        mock_db.get_session.side_effect = RuntimeError("Database not initialized")
        assert self.client.get("/health").status_code == 503

    @patch("py_polisim.api.main.db")
    def test_create_campaign(self, mock_db):
        session = _session(mock_db)
        response = self.client.post(
            "/campaigns", json={"seed": "api", "population": 20000, "player_name": "Sam Lee"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["seed"] == "api"
        assert data["player_name"] == "Sam Lee"
        assert data["months_elapsed"] == 0
        assert data["upcoming_elections"] >= 1
        session.add.assert_called_once()

    @patch("py_polisim.api.main.db")
    def test_create_campaign_rejects_tiny_city(self, mock_db):
        _session(mock_db)
        assert self.client.post("/campaigns", json={"population": 10}).status_code == 422

    @patch("py_polisim.api.main.db")
    def test_campaign_not_found(self, mock_db):
        session = _session(mock_db)
        session.query.return_value.filter.return_value.first.return_value = None

        assert self.client.get("/campaigns/missing").status_code == 404
        assert self.client.post("/campaigns/missing/tick").status_code == 404

    @patch("py_polisim.api.main.db")
    def test_get_campaign_and_elections(self, mock_db):
        campaign = start_campaign(seed="stored", population=20000)
        record = Mock(snapshot_json=campaign.model_dump_json())
        session = _session(mock_db)
        session.query.return_value.filter.return_value.first.return_value = record

        response = self.client.get(f"/campaigns/{campaign.id}")
        assert response.status_code == 200
        assert response.json()["id"] == campaign.id

        elections = self.client.get(f"/campaigns/{campaign.id}/elections").json()
        assert len(elections) == len(campaign.elections)
        assert self.client.get(f"/campaigns/{campaign.id}/elections?status=concluded").json() == []

    @patch("py_polisim.api.main.db")
    def test_tick(self, mock_db):
        campaign = start_campaign(seed="ticking", population=20000)
        record = Mock(snapshot_json=campaign.model_dump_json())
        record.name = "Ticking"
        session = _session(mock_db)
        session.query.return_value.filter.return_value.first.return_value = record

        response = self.client.post(f"/campaigns/{campaign.id}/tick?months=2")

        assert response.status_code == 200
        data = response.json()
        assert data["campaign"]["months_elapsed"] == 2
        assert data["campaign"]["name"] == "Ticking"
        assert record.months_elapsed == 2

    def test_tick_month_limit(self):
        assert self.client.post("/campaigns/any/tick?months=0").status_code == 422

    def test_normalize_polling(self):
        payload = {
            "adult_population": 10000,
            "candidates": [
                {"id": f"c{i}", "name": f"Candidate {i}", "base_score": 20} for i in range(3)
            ],
        }
        response = self.client.post("/polling/normalize", json=payload)

        assert response.status_code == 200
        assert [c["polling"] for c in response.json()] == [34, 33, 33]

    @patch("py_polisim.api.main.db")
    def test_saved_politicians(self, mock_db):
        session = _session(mock_db)
        saved = Mock(id="pol_1", party_name="Independent", created_at=None)
        saved.name = "Jo Park"
        session.query.return_value.order_by.return_value.all.return_value = [saved]

        response = self.client.post("/politicians/saved", json={"id": "pol_1", "name": "Jo Park"})
        assert response.status_code == 200
        session.add.assert_called_once()

        listed = self.client.get("/politicians/saved").json()
        assert listed == [{"id": "pol_1", "name": "Jo Park", "party_name": "Independent", "created_at": None}]
