"""
Utility modules for the habit tracker.
"""

from .date_utils import get_zone, utc_now, ensure_utc, to_storage, truncate_to_day, is_same_day, to_iso

__all__ = ['get_zone', 'utc_now', 'ensure_utc', 'to_storage', 'truncate_to_day', 'is_same_day', 'to_iso']
