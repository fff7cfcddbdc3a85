"""Dispatch logic"""

from .engine import Assignment, DispatchEngine

__all__ = ['Assignment', 'DispatchEngine']
