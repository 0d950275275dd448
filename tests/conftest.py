"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from mealz.config import get_settings
from mealz.models import Card
from mealz.store import CardStore

# =============================================================================
# Pytest Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from MEALZ_* variables and the settings cache."""
    for var in ("MEALZ_RANDOM_SEED", "MEALZ_CARDS_FILE", "MEALZ_LOG_LEVEL", "MEALZ_LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Randomness Fixtures
# =============================================================================


class IdentityShuffler:
    """Shuffler that keeps the inventory in expansion order."""

    def __init__(self):
        self.calls = 0

    def shuffle(self, x):
        self.calls += 1


class ReverseShuffler:
    """Shuffler that reverses the inventory."""

    def shuffle(self, x):
        x.reverse()


@pytest.fixture
def identity_rng():
    return IdentityShuffler()


@pytest.fixture
def reverse_rng():
    return ReverseShuffler()


# =============================================================================
# Card Fixtures
# =============================================================================


@pytest.fixture
def make_card():
    """Factory building cards directly, bypassing the store."""

    def _make(card_id: int, name: str | None = None, **kwargs) -> Card:
        return Card(id=card_id, name=name or f"Meal {card_id}", **kwargs)

    return _make


@pytest.fixture
def store():
    """Empty card store."""
    return CardStore()


@pytest.fixture
def sample_store():
    """
    Store with five cards:

    1 Tacos            mexican         beans, tortilla, cheese   batch 2
    2 Lentil Curry     vegan, indian   lentils, rice             batch 3
    3 Caesar Salad     salad           lettuce, cheese           batch 1
    4 Chef's Surprise  joker           -                         batch 1
    5 Veggie Stir Fry  vegan, asian    rice, tofu                batch 1
    """
    store = CardStore()
    store.add("Tacos", {"mexican"}, {"beans", "tortilla", "cheese"}, 2)
    store.add("Lentil Curry", {"vegan", "indian"}, {"lentils", "rice"}, 3)
    store.add("Caesar Salad", {"salad"}, {"lettuce", "cheese"})
    store.add("Chef's Surprise", {"joker"}, set())
    store.add("Veggie Stir Fry", {"vegan", "asian"}, {"rice", "tofu"})
    return store


@pytest.fixture
def sample_cards(sample_store):
    return sample_store.list_cards()


@pytest.fixture
def sample_cards_data():
    """Card definitions as they appear in a cards file."""
    return [
        {"name": "Tacos", "tags": ["mexican"], "ingredients": ["beans"], "max_batch_size": 2},
        {"name": "Lentil Curry", "tags": ["vegan"], "ingredients": ["lentils", "rice"]},
        {"name": "Chef's Surprise", "tags": ["joker"]},
    ]


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client():
    """Test client with a fresh application lifespan (and so a fresh store)."""
    from mealz.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
