from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse, PlainTextResponse

from validade.config import Settings
from validade.core.models import Inventory, Item, ItemCreate, ItemView
from validade.services.exceptions import RepoError, ValidationError
from validade.services.inventory import InventoryService
from validade.services.metrics import MetricsLogger
from validade.services.repo.json_repo import JSONInventoryRepo, JSONEventRepo

router = APIRouter(tags=["inventory"])

# ---- DI helpers --------------------------------------------------------------

def get_settings() -> Settings:
    return Settings()

def get_service(settings: Settings = Depends(get_settings)) -> InventoryService:
    return InventoryService(
        JSONInventoryRepo(settings),
        events=JSONEventRepo(settings),
        metrics=MetricsLogger(settings),
        placeholder=settings.report_placeholder,
    )

# ---- Routes ------------------------------------------------------------------

@router.get("/api/v1/items", response_model=Inventory)
def list_items(service: InventoryService = Depends(get_service)):
    return service.list_items()


@router.get("/api/v1/items/views", response_model=List[ItemView])
def list_item_views(service: InventoryService = Depends(get_service)):
    return service.list_views()


@router.post("/api/v1/items", response_model=Item, status_code=status.HTTP_201_CREATED)
def add_item(payload: ItemCreate, service: InventoryService = Depends(get_service)):
    try:
        return service.add_item(payload.name, payload.expiry_date, payload.quantity)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"field": e.field, "message": e.message})
    except RepoError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/api/v1/items/{item_id}")
def delete_item(item_id: str, service: InventoryService = Depends(get_service)):
    try:
        removed = service.delete_item(item_id)
    except RepoError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not removed:
        raise HTTPException(status_code=404, detail="Item not found")
    return {"ok": True}


@router.get("/api/v1/report", response_class=PlainTextResponse)
def get_report(service: InventoryService = Depends(get_service)):
    return service.build_report()


@router.get("/api/v1/report/file")
def download_report(
    service: InventoryService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    try:
        path = service.export_report(settings.report_file)
    except RepoError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return FileResponse(path, media_type="text/plain; charset=utf-8", filename="report.txt")
