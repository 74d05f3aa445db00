"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _random_strategy(client, seed: int) -> dict:
    response = await client.post("/api/strategy/random", json={"seed": seed})
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_evaluate_hand(client):
    """Test evaluating a soft hand."""
    response = await client.post("/api/hands/evaluate", json={"cards": ["AS", "6H"]})
    assert response.status_code == 200
    data = response.json()

    assert data["value"] == 17
    assert data["has_soft_ace"] is True
    assert data["is_pair"] is False
    assert data["is_busted"] is False
    assert data["text"] == "ASpades,6Hearts = 17"
    assert data["cards"][0]["value_high"] == 11
    assert data["cards"][0]["value_low"] == 1


@pytest.mark.asyncio
async def test_evaluate_multiple_aces(client):
    """Test two Aces count 12."""
    response = await client.post("/api/hands/evaluate", json={"cards": ["AS", "AH"]})
    data = response.json()
    assert data["value"] == 12
    assert data["is_pair"] is True


@pytest.mark.asyncio
async def test_evaluate_invalid_card(client):
    """Test an unknown card code is rejected."""
    response = await client.post("/api/hands/evaluate", json={"cards": ["ZZ"]})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_shuffled_deck(client):
    """Test a shuffled deck has 52 distinct cards and is seeded."""
    response = await client.post("/api/deck/shuffled", json={"seed": 3})
    assert response.status_code == 200
    cards = [card["text"] for card in response.json()["cards"]]
    assert len(cards) == 52
    assert len(set(cards)) == 52

    again = await client.post("/api/deck/shuffled", json={"seed": 3})
    assert [card["text"] for card in again.json()["cards"]] == cards


@pytest.mark.asyncio
async def test_random_sample(client):
    """Test a random sample of distinct cards."""
    response = await client.post("/api/deck/sample", json={"num_cards": 10, "seed": 1})
    cards = [card["text"] for card in response.json()["cards"]]
    assert len(cards) == 10
    assert len(set(cards)) == 10


@pytest.mark.asyncio
async def test_random_sample_too_large(client):
    """Test sample size validation."""
    response = await client.post("/api/deck/sample", json={"num_cards": 60})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_random_strategy_shape(client):
    """Test a random strategy has 10 pair rows, 8 soft rows and 16 hard rows."""
    data = await _random_strategy(client, 1)

    assert len(data["pairs"]) == 10
    assert len(data["soft"]) == 8
    assert len(data["hard"]) == 16
    assert all(len(row) == 10 for row in data["pairs"] + data["soft"] + data["hard"])
    assert all(action != "SPLIT" for row in data["soft"] + data["hard"] for action in row)


@pytest.mark.asyncio
async def test_mutate(client):
    """Test mutation reports overwrite counts."""
    strategy = await _random_strategy(client, 2)
    response = await client.post(
        "/api/strategy/mutate",
        json={"strategy": strategy, "impact": 0.5, "seed": 4},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["mutations"] == 170
    assert 0 < data["cells_changed"] <= 170


@pytest.mark.asyncio
async def test_crossover(client):
    """Test crossover weights by fitness."""
    mother = await _random_strategy(client, 5)
    father = await _random_strategy(client, 6)
    mother["fitness"] = 3.0
    father["fitness"] = 1.0

    response = await client.post(
        "/api/strategy/crossover",
        json={"mother": mother, "father": father, "seed": 7},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["percentage_chance_of_mine"] == pytest.approx(0.75)

    for table in ("pairs", "soft", "hard"):
        for row, mother_row, father_row in zip(data["child"][table], mother[table], father[table]):
            for action, mine, theirs in zip(row, mother_row, father_row):
                assert action in (mine, theirs)


@pytest.mark.asyncio
async def test_malformed_strategy_rejected(client):
    """Test tables of the wrong shape are rejected."""
    strategy = await _random_strategy(client, 8)
    strategy["hard"] = strategy["hard"][:-1]
    response = await client.post("/api/strategy/mutate", json={"strategy": strategy})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_split_outside_pairs_rejected(client):
    """Test SPLIT in the hard table is rejected."""
    strategy = await _random_strategy(client, 9)
    strategy["hard"][0][0] = "SPLIT"
    response = await client.post("/api/strategy/chart", json=strategy)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_evaluate_strategy(client):
    """Test simulation scoring is seeded."""
    strategy = await _random_strategy(client, 10)
    body = {"strategy": strategy, "hands": 100, "seed": 3}

    first = await client.post("/api/strategy/evaluate", json=body)
    second = await client.post("/api/strategy/evaluate", json=body)
    assert first.status_code == 200
    assert first.json()["hands"] == 100
    assert first.json()["fitness"] == second.json()["fitness"]


@pytest.mark.asyncio
async def test_chart(client):
    """Test the text chart."""
    strategy = await _random_strategy(client, 11)
    response = await client.post("/api/strategy/chart", json=strategy)
    assert response.status_code == 200
    chart = response.json()["chart"]
    assert chart.startswith("Pairs")
    assert "Hard hands" in chart


@pytest.mark.asyncio
async def test_evolution_run(client):
    """Test a tiny evolution run."""
    response = await client.post(
        "/api/evolution/run",
        json={"population_size": 4, "generations": 2, "hands_per_evaluation": 30, "seed": 1},
    )
    assert response.status_code == 200
    data = response.json()
    assert [stats["generation"] for stats in data["history"]] == [1, 2]
    assert data["best"]["fitness"] == max(stats["best"] for stats in data["history"])


@pytest.mark.asyncio
async def test_evolution_run_capped(client):
    """Test oversized runs are refused."""
    response = await client.post("/api/evolution/run", json={"generations": 10_000})
    assert response.status_code == 400
