"""
Menu endpoints. Reads are open to any signed-in account; writes are
admin only.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from smartmess.api.deps import get_current_principal, get_menu_service, require_admin
from smartmess.models import Admin
from smartmess.schemas.common import MessageResponse, SuccessResponse
from smartmess.schemas.menu import MenuOut, MenuUpdate, MenuUpsert
from smartmess.services import MenuService, Principal

router = APIRouter(prefix="/menu", tags=["Menu"])


def menu_out(menu) -> Optional[MenuOut]:
    return MenuOut.model_validate(menu) if menu is not None else None


@router.get("/today", response_model=SuccessResponse[Optional[MenuOut]])
def get_today(
    principal: Principal = Depends(get_current_principal),
    menu_service: MenuService = Depends(get_menu_service),
):
    """Today's menu; ``data`` is null when none has been published."""
    menu = menu_service.today()
    return SuccessResponse.create(
        data=menu_out(menu),
        message=None if menu else "No menu available for today",
    )


@router.get("/weekly", response_model=SuccessResponse[List[MenuOut]])
def get_weekly(
    principal: Principal = Depends(get_current_principal),
    menu_service: MenuService = Depends(get_menu_service),
):
    return SuccessResponse.create(data=[MenuOut.model_validate(m) for m in menu_service.weekly()])


@router.get("/date/{menu_date}", response_model=SuccessResponse[Optional[MenuOut]])
def get_by_date(
    menu_date: str,
    principal: Principal = Depends(get_current_principal),
    menu_service: MenuService = Depends(get_menu_service),
):
    menu = menu_service.by_date(menu_date)
    return SuccessResponse.create(
        data=menu_out(menu),
        message=None if menu else "No menu available for this date",
    )


@router.get("", response_model=SuccessResponse[List[MenuOut]])
def list_menus(
    admin: Admin = Depends(require_admin),
    menu_service: MenuService = Depends(get_menu_service),
):
    return SuccessResponse.create(data=[MenuOut.model_validate(m) for m in menu_service.list_all()])


@router.post("", response_model=SuccessResponse[MenuOut])
def upsert_menu(
    payload: MenuUpsert,
    response: Response,
    admin: Admin = Depends(require_admin),
    menu_service: MenuService = Depends(get_menu_service),
):
    """Create the menu for a date, or replace it if that date already has one."""
    menu, created = menu_service.upsert(payload, admin.id)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return SuccessResponse.create(
        data=MenuOut.model_validate(menu),
        message="Menu created successfully" if created else "Menu updated successfully",
    )


@router.put("/{menu_id}", response_model=SuccessResponse[MenuOut])
def update_menu(
    menu_id: str,
    payload: MenuUpdate,
    admin: Admin = Depends(require_admin),
    menu_service: MenuService = Depends(get_menu_service),
):
    menu = menu_service.update(menu_id, payload, admin.id)
    return SuccessResponse.create(data=MenuOut.model_validate(menu), message="Menu updated successfully")


@router.delete("/{menu_id}", response_model=MessageResponse)
def delete_menu(
    menu_id: str,
    admin: Admin = Depends(require_admin),
    menu_service: MenuService = Depends(get_menu_service),
):
    menu_service.delete(menu_id)
    return MessageResponse.create("Menu deleted successfully")
