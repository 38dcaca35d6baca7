import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from homegame.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_distribution_contract(client: TestClient) -> None:
    response = client.post(
        "/chips/distribution",
        json={
            "denominations": [1, 5, 25, 100, 500, 1000],
            "buy_in": 20,
            "small_blind": 0.10,
            "big_blind": 0.20,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["found"] is True
    assert data["combinations"]

    first = data["combinations"][0]
    assert first["id"] == "combo-1"
    assert first["strategy"] == "split"
    assert first["actual_total"] == 20.0
    assert [a["value_per_chip"] for a in first["allocations"]] == [0.1, 0.2, 0.5, 1.0, 2.0, 5.0]
    for combination in data["combinations"]:
        assert combination["is_exact"] is True


def test_distribution_without_blinds(client: TestClient) -> None:
    response = client.post("/chips/distribution", json={"denominations": [1, 5, 25, 100], "buy_in": 100})

    assert response.status_code == 200
    data = response.json()
    assert data["found"] is True
    assert [a["value_per_chip"] for a in data["combinations"][0]["allocations"]] == [0.1, 0.5, 2.0, 10.0]


def test_distribution_without_solution(client: TestClient) -> None:
    response = client.post(
        "/chips/distribution",
        json={
            "denominations": [1, 5, 25, 100, 500, 1000],
            "buy_in": 0.5,
            "small_blind": 0.10,
            "big_blind": 0.20,
        },
    )

    assert response.status_code == 200
    assert response.json() == {"found": False, "combinations": []}


def test_big_blind_must_exceed_small_blind(client: TestClient) -> None:
    response = client.post(
        "/chips/distribution",
        json={"denominations": [1, 5], "buy_in": 20, "small_blind": 0.2, "big_blind": 0.2},
    )

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "invalid_input"
    assert detail["details"] == {"small_blind": 0.2, "big_blind": 0.2}


@pytest.mark.parametrize(
    "payload",
    [
        {"denominations": [1, 5], "buy_in": 0},
        {"denominations": [], "buy_in": 20},
        {"denominations": [1, -5], "buy_in": 20},
        {"denominations": [1, 5], "buy_in": 20, "small_blind": 0.1},
    ],
    ids=["zero_buy_in", "no_denominations", "negative_denomination", "lonely_small_blind"],
)
def test_distribution_schema_errors(client: TestClient, payload: dict) -> None:
    assert client.post("/chips/distribution", json=payload).status_code == 422


def test_chip_values_marks_blinds(client: TestClient) -> None:
    response = client.post(
        "/chips/values",
        json={"denominations": [25, 1, 5], "small_blind": 0.25, "big_blind": 0.5},
    )

    assert response.status_code == 200
    assert response.json() == {
        "values": [
            {"denomination": 1.0, "value": 0.25, "role": "SB"},
            {"denomination": 5.0, "value": 0.5, "role": "BB"},
            {"denomination": 25.0, "value": 1.25, "role": None},
        ]
    }


@pytest.mark.parametrize(
    "denominations",
    [[0, 5], [1, -5]],
    ids=["zero_denomination", "negative_denomination"],
)
def test_chip_values_rejects_non_positive_denominations(client: TestClient, denominations: list) -> None:
    response = client.post(
        "/chips/values",
        json={"denominations": denominations, "small_blind": 0.1, "big_blind": 0.2},
    )

    assert response.status_code == 422


def test_evaluate_edited_distribution(client: TestClient) -> None:
    response = client.post(
        "/chips/evaluate",
        json={
            "rows": [
                {"denomination": 1, "quantity": 100, "value_per_chip": 0.1},
                {"denomination": 5, "quantity": 52, "value_per_chip": 0.2},
            ],
            "target_total": 20,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Custom"
    assert data["actual_total"] == 20.4
    assert data["difference"] == 0.4
    assert data["is_exact"] is False
    assert data["total_chips"] == 152
