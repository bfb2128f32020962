"""
Menu schemas.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator

from smartmess.schemas.common import BaseSchema

__all__ = ["MenuUpsert", "MenuUpdate", "MenuOut"]

MAX_ITEMS_PER_MEAL = 30

ItemList = List[str]


def _clean_items(items: Optional[List[str]]) -> Optional[List[str]]:
    if items is None:
        return None
    cleaned = [item.strip() for item in items if item and item.strip()]
    if any(len(item) > 100 for item in cleaned):
        raise ValueError("Menu items must be at most 100 characters")
    return cleaned


class MenuUpsert(BaseSchema):
    """Create or replace the menu of one date."""

    menu_date: date = Field(..., validation_alias=AliasChoices("date", "menu_date", "menuDate"))
    breakfast: ItemList = Field(default_factory=list, max_length=MAX_ITEMS_PER_MEAL)
    lunch: ItemList = Field(default_factory=list, max_length=MAX_ITEMS_PER_MEAL)
    snacks: ItemList = Field(default_factory=list, max_length=MAX_ITEMS_PER_MEAL)
    dinner: ItemList = Field(default_factory=list, max_length=MAX_ITEMS_PER_MEAL)
    special_note: Optional[str] = Field(default=None, max_length=500)

    @field_validator("breakfast", "lunch", "snacks", "dinner")
    @classmethod
    def clean_items(cls, v: List[str]) -> List[str]:
        return _clean_items(v)


class MenuUpdate(BaseSchema):
    """Partial update of an existing menu."""

    menu_date: Optional[date] = Field(default=None, validation_alias=AliasChoices("date", "menu_date", "menuDate"))
    breakfast: Optional[ItemList] = Field(default=None, max_length=MAX_ITEMS_PER_MEAL)
    lunch: Optional[ItemList] = Field(default=None, max_length=MAX_ITEMS_PER_MEAL)
    snacks: Optional[ItemList] = Field(default=None, max_length=MAX_ITEMS_PER_MEAL)
    dinner: Optional[ItemList] = Field(default=None, max_length=MAX_ITEMS_PER_MEAL)
    special_note: Optional[str] = Field(default=None, max_length=500)

    @field_validator("breakfast", "lunch", "snacks", "dinner")
    @classmethod
    def clean_items(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_items(v)


class MenuOut(BaseSchema):
    id: str
    menu_date: date = Field(
        validation_alias=AliasChoices("menu_date", "date"),
        serialization_alias="date",
    )
    day_of_week: str
    breakfast: List[str]
    lunch: List[str]
    snacks: List[str]
    dinner: List[str]
    breakfast_time: str
    lunch_time: str
    snacks_time: str
    dinner_time: str
    special_note: Optional[str] = None
    added_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
