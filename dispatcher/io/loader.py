# dispatcher/io/loader.py
"""Driver roster loading"""
import json
import os
from datetime import datetime
from typing import Any, Dict, List, Iterable

from dispatcher.config import DEFAULT_DRIVER_NAMES, DRIVER_ID_PREFIX
from dispatcher.errors import RosterError
from dispatcher.models import Driver
from dispatcher.utils import get_logger

logger = get_logger("roster")


class RosterLoader:
    """Builds the fixed driver roster from a JSON file or plain names"""

    @staticmethod
    def load_json(filepath: str) -> Any:
        """Load JSON file"""
        try:
            with open(filepath, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise RosterError(f"Invalid roster file {filepath}: {e}") from e

    @staticmethod
    def parse(entries: Any, available_at: datetime) -> List[Driver]:
        """Turn roster entries into drivers, numbering any without an id"""
        if not isinstance(entries, list):
            raise RosterError("Roster must be a list of driver entries")

        drivers = []
        seen = set()
        for position, entry in enumerate(entries, start=1):
            if not isinstance(entry, dict):
                raise RosterError(f"Roster entry {position} is not an object")
            name = entry.get('name')
            name = name.strip() if isinstance(name, str) else ''
            if not name:
                raise RosterError(f"Roster entry {position} has no name")

            data: Dict[str, Any] = dict(entry, name=name)
            driver_id = entry.get('driver_id')
            if driver_id is None:
                driver_id = f"{DRIVER_ID_PREFIX}{position}"
            elif not isinstance(driver_id, str) or not driver_id.strip():
                raise RosterError(f"Roster entry {position} has an invalid driver_id: {driver_id!r}")
            data['driver_id'] = driver_id.strip()
            if data['driver_id'] in seen:
                raise RosterError(f"Duplicate driver id: {data['driver_id']}")
            seen.add(data['driver_id'])

            drivers.append(Driver.from_dict(data, available_at))
        return drivers

    @staticmethod
    def from_names(names: Iterable[str], available_at: datetime) -> List[Driver]:
        return RosterLoader.parse([{'name': n} for n in names], available_at)

    @staticmethod
    def load(filepath: str, available_at: datetime) -> List[Driver]:
        """Load drivers from a JSON roster file"""
        drivers = RosterLoader.parse(RosterLoader.load_json(filepath), available_at)
        logger.info("Loaded %d drivers from %s", len(drivers), filepath)
        return drivers

    @staticmethod
    def load_or_default(filepath: str, available_at: datetime) -> List[Driver]:
        """Load the roster file, or fall back to the default driver names"""
        if filepath and os.path.exists(filepath):
            return RosterLoader.load(filepath, available_at)
        logger.info("No roster file at %s, using %d default drivers",
                    filepath, len(DEFAULT_DRIVER_NAMES))
        return RosterLoader.from_names(DEFAULT_DRIVER_NAMES, available_at)
