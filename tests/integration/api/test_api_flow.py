"""Integration tests for the REST API with a real store."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ticketboard.api.app import create_app
from ticketboard.config import Settings


@pytest.fixture
def temp_db_path() -> str:
    """Create a temporary database path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        return f.name


@pytest.fixture
def client(temp_db_path: str):
    """Create a test client whose lifespan opens and closes the store."""
    app = create_app(settings=Settings(db_path=temp_db_path, page_size=2))
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    # Cleanup
    Path(temp_db_path).unlink(missing_ok=True)
    Path(f"{temp_db_path}-wal").unlink(missing_ok=True)
    Path(f"{temp_db_path}-shm").unlink(missing_ok=True)


@pytest.mark.integration
class TestBoardApiFlow:
    """End-to-end flow through the HTTP surface."""

    def test_board_flow(self, client: TestClient) -> None:
        """Load -> add -> drop -> load more -> edit -> delete."""
        # 1. Load the seeded board
        columns = client.get("/api/v1/columns").json()["data"]
        assert [c["title"] for c in columns] == [
            "No Status",
            "First Call",
            "Negotiation",
            "Win-Closed",
            "Lost-Closed",
        ]
        source_id = columns[0]["id"]
        target_id = columns[1]["id"]

        # 2. Add five tickets
        ids = []
        for i in range(5):
            response = client.post(f"/api/v1/columns/{source_id}/tickets", json={"title": f"T{i}"})
            assert response.status_code == 201
            ids.append(response.json()["data"]["id"])

        first = client.get("/api/v1/columns").json()["data"][0]
        assert [t["title"] for t in first["tickets"]] == ["T0", "T1"]
        assert first["remaining"] == 3

        # 3. Drop T2 at the end of the empty target column
        response = client.post(
            f"/api/v1/tickets/{ids[2]}/drop", json={"column_id": target_id, "position": 0}
        )
        assert response.status_code == 200
        assert response.json()["data"]["order"] == 0

        # 4. Load more on the source column
        more = client.get(f"/api/v1/columns/{source_id}/tickets", params={"shown": 2}).json()
        assert [(t["title"], t["order"]) for t in more["data"]["tickets"]] == [("T3", 2), ("T4", 3)]
        assert more["data"]["remaining"] == 0

        # 5. Edit T0 into the target column
        response = client.patch(
            f"/api/v1/tickets/{ids[0]}", json={"title": "T0 moved", "column_id": target_id}
        )
        assert response.json()["data"]["order"] == 1

        # 6. Delete T1
        assert client.delete(f"/api/v1/tickets/{ids[1]}").status_code == 204

        source = client.get(f"/api/v1/columns/{source_id}/tickets", params={"page_size": 10})
        assert [(t["title"], t["order"]) for t in source.json()["data"]["tickets"]] == [
            ("T3", 0),
            ("T4", 1),
        ]
        target = client.get(f"/api/v1/columns/{target_id}/tickets").json()["data"]
        assert [(t["title"], t["order"]) for t in target["tickets"]] == [("T2", 0), ("T0 moved", 1)]

    def test_resequence_then_reload(self, client: TestClient) -> None:
        """PUT /order persists the displayed sequence."""
        column_id = client.get("/api/v1/columns").json()["data"][0]["id"]
        ids = [
            client.post(f"/api/v1/columns/{column_id}/tickets", json={"title": t}).json()["data"][
                "id"
            ]
            for t in ("A", "B", "C")
        ]

        response = client.put(
            f"/api/v1/columns/{column_id}/order", json={"ticket_ids": [ids[1], ids[0]]}
        )
        assert response.status_code == 200

        page = client.get(f"/api/v1/columns/{column_id}/tickets", params={"page_size": 5}).json()
        assert [t["title"] for t in page["data"]["tickets"]] == ["B", "A", "C"]
