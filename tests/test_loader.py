import json

import pytest

from dispatcher.config import DEFAULT_DRIVER_NAMES
from dispatcher.dispatch import DispatchEngine
from dispatcher.errors import RosterError
from dispatcher.io import RosterLoader
from tests.conftest import T0


def test_from_names_numbers_drivers():
    drivers = RosterLoader.from_names(["John", "Sarah"], T0)

    assert [(d.driver_id, d.name) for d in drivers] == [("DRV1", "John"), ("DRV2", "Sarah")]
    assert all(d.next_available_at == T0 for d in drivers)


def test_load_roster_file(tmp_path):
    path = tmp_path / "drivers.json"
    path.write_text(json.dumps([
        {"driver_id": "D-7", "name": "Ana"},
        {"name": "Ben"},
    ]))

    drivers = RosterLoader.load(str(path), T0)
    assert [(d.driver_id, d.name) for d in drivers] == [("D-7", "Ana"), ("DRV2", "Ben")]


def test_missing_file_falls_back_to_defaults(tmp_path):
    drivers = RosterLoader.load_or_default(str(tmp_path / "nope.json"), T0)
    assert [d.name for d in drivers] == DEFAULT_DRIVER_NAMES


@pytest.mark.parametrize("content", [
    '{"name": "x"}',
    '[{"driver_id": "DRV1"}]',
    '[{"driver_id": "DRV1", "name": "A"}, {"driver_id": "DRV1", "name": "B"}]',
    '["Ana"]',
    'not json',
    '[{"driver_id": 5, "name": "A"}]',
    '[{"driver_id": "  ", "name": "A"}]',
    '[{"driver_id": "DRV1", "name": null}]',
])
def test_bad_roster_rejected(tmp_path, content):
    path = tmp_path / "drivers.json"
    path.write_text(content)
    with pytest.raises(RosterError):
        RosterLoader.load(str(path), T0)


def test_engine_from_config_uses_roster_file(tmp_path, clock):
    path = tmp_path / "drivers.json"
    path.write_text(json.dumps([{"name": "Ana"}, {"name": "Ben"}, {"name": "Cy"}]))

    engine = DispatchEngine.from_config(drivers_file=str(path), clock=clock)

    assert [d.name for d in engine.drivers()] == ["Ana", "Ben", "Cy"]
    assert all(d.next_available_at == T0 for d in engine.drivers())


def test_null_driver_id_is_numbered():
    drivers = RosterLoader.parse([{"driver_id": None, "name": "Ana"}, {"name": "Ben"}], T0)
    assert [d.driver_id for d in drivers] == ["DRV1", "DRV2"]
