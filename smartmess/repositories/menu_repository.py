"""
Menu repository: date-keyed daily menus.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from smartmess.models import Menu
from smartmess.repositories.base_repository import BaseRepository

MENU_CONTENT_FIELDS = ("day_of_week", "breakfast", "lunch", "snacks", "dinner", "special_note", "added_by")


class MenuRepository(BaseRepository[Menu]):
    conflict_message = "A menu for this date already exists"

    def __init__(self, db: Session):
        super().__init__(Menu, db)

    def get_by_date(self, menu_date: date) -> Optional[Menu]:
        return self.find_one(menu_date=menu_date)

    def list_between(self, start: date, end: date) -> List[Menu]:
        """Menus dated within [start, end], ascending."""
        return self.list(
            Menu.menu_date >= start,
            Menu.menu_date <= end,
            order_by=[Menu.menu_date.asc()],
        )

    def list_all(self) -> List[Menu]:
        return self.list(order_by=[Menu.menu_date.desc()])

    def upsert_for_date(self, values: Dict[str, Any]) -> Tuple[Menu, bool]:
        """Create the menu for ``values['menu_date']`` or overwrite its content."""
        update_columns = [field for field in MENU_CONTENT_FIELDS if field in values]
        return self.upsert(values, conflict_columns=["menu_date"], update_columns=update_columns)
