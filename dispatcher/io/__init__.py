"""Input/Output operations"""

from .loader import RosterLoader

__all__ = ['RosterLoader']
