from datetime import timedelta

import pytest

from dispatcher.errors import DriverNotFoundError, NoDriversAvailableError, RosterError
from dispatcher.models import Driver
from dispatcher.stores import DriverPool
from tests.conftest import T0


def make_pool(*offsets_minutes):
    drivers = [
        Driver(f"DRV{i}", f"Driver {i}", T0 + timedelta(minutes=m))
        for i, m in enumerate(offsets_minutes, start=1)
    ]
    return DriverPool(drivers)


def test_extract_earliest_picks_smallest_time():
    pool = make_pool(20, 5, 10)
    assert pool.extract_earliest().driver_id == "DRV2"
    assert pool.extract_earliest().driver_id == "DRV3"
    assert pool.extract_earliest().driver_id == "DRV1"


def test_ties_broken_by_roster_order():
    pool = make_pool(0, 0, 0)
    assert [pool.extract_earliest().driver_id for _ in range(3)] == ["DRV1", "DRV2", "DRV3"]


def test_extracted_driver_stays_on_roster():
    pool = make_pool(0, 0)
    driver = pool.extract_earliest()

    assert len(pool) == 1
    assert pool.roster_size == 2
    assert pool.get(driver.driver_id) is driver
    assert pool.is_consistent()


def test_empty_pool_raises():
    pool = make_pool(0)
    pool.extract_earliest()
    with pytest.raises(NoDriversAvailableError):
        pool.extract_earliest()


def test_reinsert_uses_current_time():
    pool = make_pool(0, 10)
    driver = pool.extract_earliest()
    driver.next_available_at = T0 + timedelta(minutes=30)
    pool.reinsert(driver)

    assert pool.peek_earliest().driver_id == "DRV2"
    assert pool.is_consistent()


def test_reinsert_copy_updates_roster():
    pool = make_pool(0, 10)
    driver = pool.extract_earliest().copy()
    driver.next_available_at = T0 + timedelta(minutes=45)
    pool.reinsert(driver)

    assert pool.get("DRV1").next_available_at == T0 + timedelta(minutes=45)
    assert pool.heap_view()["DRV1"] == T0 + timedelta(minutes=45)


def test_reinsert_driver_already_queued_does_not_duplicate():
    pool = make_pool(0, 10)
    driver = pool.get("DRV2")
    driver.next_available_at = T0 - timedelta(minutes=1)
    pool.reinsert(driver)

    assert len(pool) == 2
    assert pool.is_consistent()
    assert pool.extract_earliest().driver_id == "DRV2"


def test_update_availability_repositions_queued_driver():
    pool = make_pool(30, 10)
    pool.update_availability("DRV1", T0)

    assert pool.is_consistent()
    assert pool.extract_earliest().driver_id == "DRV1"


def test_update_availability_for_extracted_driver_touches_roster_only():
    pool = make_pool(0, 10)
    driver = pool.extract_earliest()
    pool.update_availability(driver.driver_id, T0 + timedelta(minutes=5))

    assert "DRV1" not in pool.heap_view()
    assert len(pool) == 1
    assert pool.is_consistent()


def test_unknown_driver_raises():
    pool = make_pool(0)
    assert pool.get("DRV9") is None
    with pytest.raises(DriverNotFoundError):
        pool.update_availability("DRV9", T0)


def test_duplicate_driver_ids_rejected():
    with pytest.raises(RosterError):
        DriverPool([Driver("DRV1", "A", T0), Driver("DRV1", "B", T0)])


def test_snapshot_is_roster_order_copies():
    pool = make_pool(20, 5)
    snapshot = pool.snapshot()
    snapshot[0].next_available_at = T0 + timedelta(days=1)

    assert [d.driver_id for d in snapshot] == ["DRV1", "DRV2"]
    assert pool.get("DRV1").next_available_at == T0 + timedelta(minutes=20)
    assert pool.is_consistent()


def test_pool_keeps_its_own_driver_records():
    drivers = [Driver("DRV1", "A", T0), Driver("DRV2", "B", T0)]
    pool = DriverPool(drivers)
    drivers[1].next_available_at = T0 - timedelta(hours=1)

    assert pool.get("DRV2") is not drivers[1]
    assert pool.get("DRV2").next_available_at == T0
    assert pool.is_consistent()
    assert pool.extract_earliest().driver_id == "DRV1"


@pytest.mark.parametrize("driver_id", [None, "", 5])
def test_invalid_driver_ids_rejected(driver_id):
    with pytest.raises(RosterError):
        DriverPool([Driver(driver_id, "A", T0)])
