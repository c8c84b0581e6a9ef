# src/threadline/api/v1/endpoints/revalidation.py
"""Endpoints the rendering tier polls to learn which pages to regenerate."""

from fastapi import APIRouter, Query

from ..dependencies import RevalidatorDep

router = APIRouter(prefix="/revalidation", tags=["revalidation"])


@router.get("/stale")
async def list_stale_paths(revalidator: RevalidatorDep) -> dict[str, list[str]]:
    """List every path currently marked stale."""
    return {"paths": sorted(revalidator.stale_paths())}


@router.post("/consume")
async def consume_stale_path(
    revalidator: RevalidatorDep,
    path: str = Query(..., description="Rendered path about to be regenerated"),
) -> dict[str, object]:
    """Clear the stale flag for a path and report whether it was set."""
    return {"path": path, "stale": revalidator.consume(path)}
