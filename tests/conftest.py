"""Shared pytest fixtures for the storefront tests."""
from __future__ import annotations

import asyncio
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from store_api.database.carts import CartStore
from store_api.database.plants import FALLBACK_PLANTS
from store_api.main import create_app
from store_api.models.plant import Plant


class StubPlantClient:
    """Catalog double serving plants from a dict."""

    def __init__(self, plants: Optional[dict[str, Plant]] = None) -> None:
        self.plants = {k: v.model_copy(deep=True) for k, v in (plants or FALLBACK_PLANTS).items()}
        self.lookups: list[str] = []
        self.base_url = "http://catalog.test"
        self.closed = False

    async def get_plant(self, plant_id: str) -> Optional[Plant]:
        self.lookups.append(plant_id)
        # Suspend like a real network call would
        await asyncio.sleep(0)
        if plant_id == "boom":
            raise RuntimeError("catalog exploded")
        plant = self.plants.get(plant_id)
        return plant.model_copy(deep=True) if plant else None

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def plant_client() -> StubPlantClient:
    return StubPlantClient()


@pytest.fixture()
def cart_store(plant_client: StubPlantClient) -> CartStore:
    return CartStore(plant_client)


@pytest.fixture()
def app(plant_client: StubPlantClient):
    return create_app(plant_client=plant_client)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
