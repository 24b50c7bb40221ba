# server/api/grid.py

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.auth import get_current_user
from core.grid import DailyGrid
from core.permissions import PermissionDenied
from core.storage import CollectionRepository
from database import get_record_repository
from models.record import GridCell, LabRecord
from models.user import User


router = APIRouter()


class GridSaveRequest(BaseModel):
    cells: list[GridCell]


def serialize_grid(grid: DailyGrid) -> dict:
    return {
        "date": grid.date,
        "editable": grid.editable,
        "cells": [
            cell.model_dump(mode="json", by_alias=True, exclude_none=True)
            for cell in grid.ordered_cells()
        ],
    }


def load_grid(records: CollectionRepository[LabRecord], day: str, user: User) -> DailyGrid:
    try:
        return DailyGrid.load(records, day, user.role)
    except ValueError:
        raise HTTPException(status_code=400, detail="Date must be in YYYY-MM-DD format.")


@router.get("/grid/{day}")
def get_grid(
    day: str,
    records: CollectionRepository[LabRecord] = Depends(get_record_repository),
    current_user: User = Depends(get_current_user),
):
    grid = load_grid(records, day, current_user)
    return {"status": "success", "data": serialize_grid(grid)}


@router.post("/grid/{day}/save")
def save_grid(
    day: str,
    req: GridSaveRequest,
    records: CollectionRepository[LabRecord] = Depends(get_record_repository),
    current_user: User = Depends(get_current_user),
):
    """
    Applies the submitted cells to the grid for the date and saves all of them.
    """
    grid = load_grid(records, day, current_user)

    try:
        grid.apply(req.cells)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        saved = grid.save_all(records, current_user)
    except PermissionDenied as e:
        raise HTTPException(status_code=403, detail=str(e))

    return {"status": "success", "data": {"saved": saved, "grid": serialize_grid(grid)}}
