from fastapi import APIRouter, Depends, HTTPException, Query, status
from skateroom.db.store import TableStore
from skateroom.routers.dependencies import get_current_user, get_store
from skateroom.schemas.auth import AuthUser
from skateroom.schemas.gear import CategoryBucket, GearCreate, GearUpdate, GearWriteResult
from skateroom.services.gear_service import (
    GearNotFoundError,
    GearValidationError,
    create_gear,
    delete_gear,
    fetch_all_gear,
    filter_gear,
    update_gear,
)


router = APIRouter()


def _unprocessable(exc: GearValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": str(exc), "errors": exc.errors},
    )


@router.get("", response_model=list[CategoryBucket])
def list_gear(
    q: str | None = Query(default=None, description="Case-insensitive search over name, brand and specs"),
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> list[CategoryBucket]:
    return filter_gear(fetch_all_gear(store, current_user.id), q)


@router.post("", response_model=GearWriteResult, status_code=status.HTTP_201_CREATED)
def add_gear(
    payload: GearCreate,
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> GearWriteResult:
    try:
        return create_gear(store, current_user.id, payload)
    except GearValidationError as exc:
        raise _unprocessable(exc) from exc


@router.put("/{gear_id}", response_model=GearWriteResult)
def edit_gear(
    gear_id: str,
    payload: GearUpdate,
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> GearWriteResult:
    try:
        return update_gear(store, current_user.id, gear_id, payload)
    except GearNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Gear not found") from exc
    except GearValidationError as exc:
        raise _unprocessable(exc) from exc


@router.delete("/{gear_id}", response_model=GearWriteResult)
def remove_gear(
    gear_id: str,
    store: TableStore = Depends(get_store),
    current_user: AuthUser = Depends(get_current_user),
) -> GearWriteResult:
    try:
        return delete_gear(store, current_user.id, gear_id)
    except GearNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Gear not found") from exc
