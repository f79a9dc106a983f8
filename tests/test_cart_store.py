from __future__ import annotations

import asyncio

import pytest

from store_api.database.carts import CartStore
from store_api.errors import CartValidationError, InsufficientStockError, NotFoundError


@pytest.mark.asyncio
async def test_get_unknown_session_is_empty(cart_store: CartStore) -> None:
    cart = cart_store.get("nobody")
    assert cart.items == []
    assert cart.total == 0
    assert cart.item_count == 0


@pytest.mark.asyncio
async def test_add_same_plant_twice_merges_quantities(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 2)
    cart = await cart_store.add("s1", "snake-plant", 3)

    assert len(cart.items) == 1
    assert cart.items[0].plant_id == "snake-plant"
    assert cart.items[0].quantity == 5
    assert cart.item_count == 5


@pytest.mark.asyncio
async def test_add_defaults_to_single_unit(cart_store: CartStore) -> None:
    cart = await cart_store.add("s1", "monstera-deliciosa")
    assert cart.items[0].quantity == 1
    assert cart.total == 899


@pytest.mark.asyncio
async def test_total_is_sum_of_price_times_quantity(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 2)
    await cart_store.add("s1", "bird-of-paradise", 1)
    cart = await cart_store.update("s1", "snake-plant", 4)

    assert cart.total == 599 * 4 + 1499
    assert cart.total == sum(i.plant.price * i.quantity for i in cart.items)
    assert cart.item_count == 5


@pytest.mark.asyncio
async def test_items_keep_insertion_order(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant")
    await cart_store.add("s1", "bird-of-paradise")
    cart = await cart_store.add("s1", "snake-plant")
    assert [i.plant_id for i in cart.items] == ["snake-plant", "bird-of-paradise"]


@pytest.mark.asyncio
async def test_add_requires_plant_id(cart_store: CartStore) -> None:
    with pytest.raises(CartValidationError) as exc:
        await cart_store.add("s1", None)
    assert exc.value.message == "Plant ID is required"
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_add_rejects_non_positive_quantity(cart_store: CartStore) -> None:
    with pytest.raises(CartValidationError):
        await cart_store.add("s1", "snake-plant", 0)
    assert cart_store.get("s1").items == []


@pytest.mark.asyncio
async def test_add_unknown_plant_is_not_found(cart_store: CartStore) -> None:
    with pytest.raises(NotFoundError) as exc:
        await cart_store.add("s1", "cactus")
    assert exc.value.message == "Plant not found"


@pytest.mark.asyncio
async def test_add_over_stock_is_rejected_and_cart_unchanged(cart_store: CartStore) -> None:
    await cart_store.add("s1", "bird-of-paradise", 2)

    with pytest.raises(InsufficientStockError) as exc:
        await cart_store.add("s1", "bird-of-paradise", 13)

    assert exc.value.message == "Insufficient stock"
    cart = cart_store.get("s1")
    assert cart.items[0].quantity == 2
    assert cart.total == 2998


@pytest.mark.asyncio
async def test_add_out_of_stock_plant_is_rejected(cart_store: CartStore, plant_client) -> None:
    plant_client.plants["snake-plant"].in_stock = False

    with pytest.raises(InsufficientStockError):
        await cart_store.add("s1", "snake-plant", 1)


@pytest.mark.asyncio
async def test_add_fetches_plant_on_every_call(cart_store: CartStore, plant_client) -> None:
    await cart_store.add("s1", "snake-plant")
    await cart_store.add("s1", "snake-plant")
    assert plant_client.lookups == ["snake-plant", "snake-plant"]


@pytest.mark.asyncio
async def test_update_to_zero_removes_item(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 2)
    await cart_store.add("s1", "monstera-deliciosa", 1)

    cart = await cart_store.update("s1", "snake-plant", 0)

    assert [i.plant_id for i in cart.items] == ["monstera-deliciosa"]
    assert cart.item_count == 1
    assert cart.total == 899


@pytest.mark.asyncio
async def test_update_does_not_recheck_stock(cart_store: CartStore) -> None:
    await cart_store.add("s1", "bird-of-paradise", 1)
    cart = await cart_store.update("s1", "bird-of-paradise", 100)
    assert cart.items[0].quantity == 100


@pytest.mark.asyncio
async def test_update_negative_quantity_is_invalid(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 1)
    with pytest.raises(CartValidationError) as exc:
        await cart_store.update("s1", "snake-plant", -1)
    assert exc.value.message == "Invalid plant ID or quantity"


@pytest.mark.asyncio
async def test_update_missing_item_is_not_found(cart_store: CartStore) -> None:
    with pytest.raises(NotFoundError) as exc:
        await cart_store.update("s1", "snake-plant", 1)
    assert exc.value.message == "Item not found in cart"


@pytest.mark.asyncio
async def test_remove_missing_item_is_noop(cart_store: CartStore) -> None:
    before = await cart_store.add("s1", "snake-plant", 2)
    after = await cart_store.remove("s1", "monstera-deliciosa")
    assert after == before


@pytest.mark.asyncio
async def test_remove_drops_item(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 2)
    cart = await cart_store.remove("s1", "snake-plant")
    assert cart.items == []
    assert cart.total == 0


@pytest.mark.asyncio
async def test_clear_then_get_is_empty(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 2)

    cleared = await cart_store.clear("s1")
    cart = cart_store.get("s1")

    assert cleared.items == [] and cleared.total == 0 and cleared.item_count == 0
    assert cart.items == [] and cart.total == 0 and cart.item_count == 0


@pytest.mark.asyncio
async def test_sessions_are_isolated(cart_store: CartStore) -> None:
    await cart_store.add("alice", "snake-plant", 1)
    await cart_store.add("bob", "monstera-deliciosa", 3)

    assert [i.plant_id for i in cart_store.get("alice").items] == ["snake-plant"]
    assert cart_store.get("bob").item_count == 3
    assert cart_store.session_count == 2


@pytest.mark.asyncio
async def test_get_item(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 2)

    item = cart_store.get_item("s1", "snake-plant")
    assert item.quantity == 2
    assert item.plant.name == "Snake Plant (Sansevieria)"

    with pytest.raises(NotFoundError):
        cart_store.get_item("s1", "monstera-deliciosa")


@pytest.mark.asyncio
async def test_responses_are_snapshots(cart_store: CartStore) -> None:
    first = await cart_store.add("s1", "snake-plant", 1)
    await cart_store.add("s1", "snake-plant", 1)
    assert first.items[0].quantity == 1


@pytest.mark.asyncio
async def test_concurrent_adds_do_not_lose_updates(cart_store: CartStore) -> None:
    await asyncio.gather(*(cart_store.add("s1", "snake-plant", 1) for _ in range(20)))

    cart = cart_store.get("s1")
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 20


@pytest.mark.asyncio
async def test_clear_waits_for_in_flight_add(cart_store: CartStore) -> None:
    add = asyncio.create_task(cart_store.add("s1", "snake-plant", 1))
    await asyncio.sleep(0)  # add now holds the lock, suspended on lookup
    await cart_store.clear("s1")
    await add

    assert cart_store.get("s1").items == []


@pytest.mark.asyncio
async def test_finished_sessions_release_their_state(cart_store: CartStore) -> None:
    for n in range(100):
        key = f"s{n}"
        await cart_store.add(key, "snake-plant", 1)
        await cart_store.remove(key, "snake-plant")
        await cart_store.clear(key)
        await cart_store.remove(key, "monstera-deliciosa")

    assert cart_store.session_count == 0
    assert cart_store._locks == {}
    assert cart_store._lock_users == {}


@pytest.mark.asyncio
async def test_emptied_cart_is_dropped(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 2)
    await cart_store.add("s2", "snake-plant", 1)

    await cart_store.update("s1", "snake-plant", 0)
    await cart_store.remove("s2", "snake-plant")

    assert cart_store.session_count == 0
    assert cart_store._locks == {}


@pytest.mark.asyncio
async def test_failed_mutation_leaves_no_lock(cart_store: CartStore) -> None:
    with pytest.raises(NotFoundError):
        await cart_store.update("nobody", "snake-plant", 1)
    with pytest.raises(NotFoundError):
        await cart_store.add("nobody", "cactus")

    assert cart_store.session_count == 0
    assert cart_store._locks == {}


@pytest.mark.asyncio
async def test_live_cart_keeps_its_lock(cart_store: CartStore) -> None:
    await cart_store.add("s1", "snake-plant", 1)
    assert list(cart_store._locks) == ["s1"]
    assert cart_store._lock_users == {}


@pytest.mark.asyncio
async def test_lock_survives_waiting_requests(cart_store: CartStore) -> None:
    add = asyncio.create_task(cart_store.add("s1", "snake-plant", 1))
    remove = asyncio.create_task(cart_store.remove("s1", "snake-plant"))
    await asyncio.sleep(0)  # add holds the lock, remove waits on it

    assert "s1" in cart_store._locks
    assert cart_store._lock_users["s1"] == 2

    await asyncio.gather(add, remove)
    assert cart_store.session_count == 0
    assert cart_store._locks == {}
