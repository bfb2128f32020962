"""
Persistence gateway: engine lifecycle and sessions.
"""

from smartmess.db.database import Database

__all__ = ["Database"]
