"""MagFinder: find digitized editions of a periodical across public archives."""

__version__ = "1.0.0"

from .config import Settings
from .search import PeriodicalSearch, SearchReport, search_all, search_all_sync

__all__ = ['Settings', 'PeriodicalSearch', 'SearchReport', 'search_all', 'search_all_sync']
