"""
Menu service: daily, dated and weekly menus plus admin upserts.

"Today" is the calendar date in the configured TIMEZONE. The weekly view
is the rolling window starting today.
"""

import logging
from datetime import timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from smartmess.config.settings import Settings
from smartmess.core.exceptions import NotFoundError
from smartmess.models import Menu
from smartmess.repositories import MenuRepository
from smartmess.schemas.menu import MenuUpdate, MenuUpsert
from smartmess.utils.date_utils import day_name, local_today, parse_iso_date

logger = logging.getLogger(__name__)


class MenuService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.menus = MenuRepository(db)

    def today(self) -> Optional[Menu]:
        """Today's menu, or None when none has been published."""
        return self.menus.get_by_date(local_today(self.settings.TIMEZONE))

    def by_date(self, value: str) -> Optional[Menu]:
        """
        Menu for an ISO date string.

        Malformed dates are treated like dates without a menu.
        """
        menu_date = parse_iso_date(value)
        if menu_date is None:
            return None
        return self.menus.get_by_date(menu_date)

    def weekly(self) -> List[Menu]:
        """Menus from today through the next WEEKLY_MENU_DAYS - 1 days, ascending."""
        start = local_today(self.settings.TIMEZONE)
        end = start + timedelta(days=self.settings.WEEKLY_MENU_DAYS - 1)
        return self.menus.list_between(start, end)

    def list_all(self) -> List[Menu]:
        return self.menus.list_all()

    def get(self, menu_id: str) -> Menu:
        menu = self.menus.get(menu_id)
        if menu is None:
            raise NotFoundError("Menu")
        return menu

    def upsert(self, data: MenuUpsert, admin_id: Optional[str] = None) -> Tuple[Menu, bool]:
        """
        Create the menu for a date or replace its contents.

        Returns:
            The stored menu and whether it was newly created
        """
        values = {
            "menu_date": data.menu_date,
            "day_of_week": day_name(data.menu_date),
            "breakfast": data.breakfast,
            "lunch": data.lunch,
            "snacks": data.snacks,
            "dinner": data.dinner,
            "special_note": data.special_note,
            "added_by": admin_id,
        }
        menu, created = self.menus.upsert_for_date(values)
        logger.info(f"Menu for {data.menu_date} {'created' if created else 'updated'} by {admin_id}")
        return menu, created

    def update(self, menu_id: str, data: MenuUpdate, admin_id: Optional[str] = None) -> Menu:
        """
        Apply a partial update to an existing menu.

        Moving a menu onto a date that already has one raises ConflictError.
        """
        menu = self.get(menu_id)
        changes = data.model_dump(exclude_unset=True)
        for key in ("menu_date", "breakfast", "lunch", "snacks", "dinner"):
            if key in changes and changes[key] is None:
                del changes[key]
        if "menu_date" in changes:
            changes["day_of_week"] = day_name(changes["menu_date"])
        changes["added_by"] = admin_id
        return self.menus.update(menu, changes)

    def delete(self, menu_id: str) -> None:
        self.menus.delete(self.get(menu_id))
