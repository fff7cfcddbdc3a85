# dispatcher/models/driver.py
"""Driver model"""
import copy
from datetime import datetime
from typing import Dict, Any

from dispatcher.utils import to_iso


class Driver:
    """Represents a delivery driver"""

    def __init__(self, driver_id: str, name: str, next_available_at: datetime):
        self.driver_id: str = driver_id
        self.name: str = name
        self.next_available_at: datetime = next_available_at

    @classmethod
    def from_dict(cls, data: Dict[str, Any], available_at: datetime) -> 'Driver':
        """Build a driver from a roster entry"""
        return cls(data['driver_id'], data.get('name', 'Unknown'), available_at)

    def is_available(self, now: datetime) -> bool:
        """A driver is free once the clock reaches next_available_at"""
        return self.next_available_at <= now

    def copy(self) -> 'Driver':
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'driver_id': self.driver_id,
            'name': self.name,
            'next_available_at': to_iso(self.next_available_at),
        }

    def __repr__(self) -> str:
        return f"Driver({self.driver_id}, {self.name}, {self.next_available_at})"
