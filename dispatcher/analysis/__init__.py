"""Analysis functionality"""

from .summary import SummaryBuilder

__all__ = ['SummaryBuilder']
