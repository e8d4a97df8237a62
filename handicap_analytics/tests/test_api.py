from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from handicap_analytics.api.app import create_app

DECAYING = [
    {"date": "2024-01-01", "hi": 20.0},
    {"date": "2024-01-31", "hi": 17.0},
    {"date": "2024-03-01", "hi": 15.5},
    {"date": "2024-03-31", "hi": 14.8},
    {"date": "2024-04-30", "hi": 14.5},
]


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def _rows(round_id: str, played_at: str, strokes, **extra):
    rows = []
    for i, score in enumerate(strokes, start=1):
        row = {
            "profile_id": "p1",
            "round_id": round_id,
            "played_at": played_at,
            "course_id": "c1",
            "course_name": "Links",
            "tee_box_id": "t1",
            "tee_name": "White",
            "hole_number": i,
            "par": 4,
            "stroke_index": i,
            "strokes": score,
        }
        row.update(extra)
        rows.append(row)
    return rows


@pytest.fixture
def records():
    return (
        _rows("r1", "2024-01-01", [4] * 18, course_handicap=10)
        + _rows("r2", "2024-03-01", [5, 6, 3] + [4] * 15, course_handicap=10)
        + _rows("r3", "2024-03-08", [4, 7, 4] + [5] * 15, course_handicap=10)
    )


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_fit_with_trend(client: TestClient) -> None:
    response = client.post(
        "/api/projections/fit", json={"points": DECAYING, "trendSteps": 10}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["fit"]["firstDate"].startswith("2024-01-01")
    assert body["fit"]["b"] > 0
    assert len(body["trend"]) == 11


def test_fit_insufficient(client: TestClient) -> None:
    response = client.post("/api/projections/fit", json={"points": DECAYING[:1]})
    assert response.status_code == 200
    assert response.json() == {"status": "insufficient", "fit": None, "trend": []}


def test_fit_rejects_bad_dates(client: TestClient) -> None:
    response = client.post(
        "/api/projections/fit", json={"points": [{"date": "soon", "hi": 10}]}
    )
    assert response.status_code == 422


@pytest.mark.parametrize(
    "target, status",
    [(14.6, "estimated"), (10.0, "unreachable"), (25.0, "reached")],
)
def test_eta(client: TestClient, target: float, status: str) -> None:
    response = client.post(
        "/api/projections/eta",
        json={"points": DECAYING, "target": target, "today": "2024-03-31"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == status


def test_projection(client: TestClient) -> None:
    response = client.post(
        "/api/projections/projection", json={"points": DECAYING, "on": "2024-06-01"}
    )
    body = response.json()
    assert 14.0 < body["projected"] < 14.6

    response = client.post(
        "/api/projections/projection", json={"points": [], "on": "2024-06-01"}
    )
    assert response.json() == {"projected": None, "note": "Not enough data"}


def test_floor(client: TestClient) -> None:
    response = client.post(
        "/api/projections/floor", json={"points": DECAYING, "today": "2024-03-31"}
    )
    body = response.json()
    assert 14.0 < body["value"] < 15.5
    assert body["eta"]["status"] in {"reached", "estimated"}


def test_intercept(client: TestClient) -> None:
    higher = [
        {"date": "2024-01-01", "hi": 30.0},
        {"date": "2024-03-01", "hi": 27.0},
        {"date": "2024-04-30", "hi": 25.5},
    ]
    response = client.post(
        "/api/projections/intercept",
        json={"a": DECAYING, "b": higher, "today": "2024-05-01", "horizonDays": 365},
    )
    body = response.json()
    assert body["status"] == "no_crossing_in_window"
    assert body["note"] == "No crossing found in next 365 days"
    assert body["daysFromToday"] is None

    response = client.post(
        "/api/projections/intercept", json={"a": DECAYING, "b": DECAYING[:1]}
    )
    assert response.json()["status"] == "insufficient"


def test_compare_goal(client: TestClient) -> None:
    entities = [
        {"entityId": "me", "name": "Me", "points": DECAYING},
        {"entityId": "friend", "points": [{"date": "2024-01-01", "hi": 9.0}]},
    ]
    response = client.post(
        "/api/projections/compare/goal",
        json={"entities": entities, "target": 14.6, "today": "2024-03-31"},
    )
    rows = response.json()
    assert [row["entityId"] for row in rows] == ["me", "friend"]
    assert rows[0]["status"] == "estimated"
    assert rows[1]["status"] == "insufficient"
    assert rows[1]["hiNow"] == 9.0


def test_compare_projection(client: TestClient) -> None:
    entities = [
        {"id": "friend", "points": [{"date": "2024-01-01", "hi": 9.0}]},
        {"id": "me", "name": "Me", "points": DECAYING},
    ]
    response = client.post(
        "/api/projections/compare/projection",
        json={"entities": entities, "on": "2024-06-01"},
    )
    rows = response.json()
    assert [row["entityId"] for row in rows] == ["me", "friend"]
    assert rows[1]["projected"] is None


def test_rounds(client: TestClient, records) -> None:
    response = client.post("/api/stats/rounds", json={"records": records})

    assert response.status_code == 200
    rounds = response.json()
    assert [r["roundId"] for r in rounds] == ["r3", "r2", "r1"]
    assert rounds[2]["grossToPar18eq"] == 0
    assert rounds[2]["netToPar"] == -10


def test_rounds_with_filter(client: TestClient, records) -> None:
    response = client.post(
        "/api/stats/rounds",
        json={"records": records, "filter": {"preset": "30d"}, "now": "2024-03-10"},
    )
    assert [r["roundId"] for r in response.json()] == ["r3", "r2"]

    response = client.post(
        "/api/stats/rounds", json={"records": records, "filter": {"preset": "2w"}}
    )
    assert response.status_code == 422


def test_milestones(client: TestClient, records) -> None:
    body = client.post("/api/stats/milestones", json={"records": records}).json()

    assert body["summary"]["rounds"] == 3
    assert body["bestWorst"]["best_18_gross"]["roundId"] == "r1"
    assert body["firsts"]["first_birdie"]["roundId"] == "r2"
    assert body["goals"]["break_80"] == 2


def test_eclectic(client: TestClient, records) -> None:
    response = client.post(
        "/api/stats/eclectic",
        json={"records": records, "courseId": "c1", "teeBoxId": "t1"},
    )
    body = response.json()
    assert body["summary"]["complete"] is True
    assert body["summary"]["total"] == 71
    assert body["bestByHole"]["3"]["strokes"] == 3


def test_records(client: TestClient, records) -> None:
    [record] = client.post("/api/stats/records", json={"records": records}).json()
    assert record["bestGross"]["score"] == 72
    assert record["parTotal"] == 72
    assert record["rounds"] == 3


def test_streaks(client: TestClient, records) -> None:
    body = client.post(
        "/api/stats/streaks", json={"records": records, "gapDays": 7}
    ).json()
    assert body["longest"] == 2
    assert body["current"] == 2


def test_stretches(client: TestClient, records) -> None:
    response = client.post(
        "/api/stats/stretches", json={"records": records, "windows": [1, 2, 5]}
    )
    stretches = response.json()
    assert [s["window"] for s in stretches] == [1, 2]
    assert stretches[0]["average"] == 0

    response = client.post(
        "/api/stats/stretches", json={"records": records, "windows": [0]}
    )
    assert response.status_code == 422


def test_stretches_default_windows(client: TestClient, records) -> None:
    stretches = client.post("/api/stats/stretches", json={"records": records}).json()
    assert [s["window"] for s in stretches] == [3]


def test_worst_holes(client: TestClient, records) -> None:
    holes = client.post(
        "/api/stats/worst-holes", json={"records": records, "topN": 2}
    ).json()
    assert len(holes) == 2
    assert holes[0]["hole"] == 2


def test_breakdown(client: TestClient, records) -> None:
    body = client.post("/api/stats/breakdown", json={"records": records}).json()

    assert body["summary"]["holes"] == 54
    assert [b["bucket"] for b in body["byPar"]] == ["4"]
    assert body["byLength"] == []
    assert len(body["afterPrevious"]) == 5
    assert body["distribution"]["rounds"] == 3
