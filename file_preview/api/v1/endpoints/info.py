from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from file_preview.api.v1.deps import get_drive, get_settings
from file_preview.core.config import Settings
from file_preview.services.storage import LocalDrive

router = APIRouter(tags=["info"])


class FSStats(BaseModel):
    free: int
    total: int
    used: int


class FSFeatures(BaseModel):
    preview: Dict[str, bool]


class FSInfo(BaseModel):
    stats: FSStats
    features: FSFeatures


@router.get("/info", response_model=FSInfo)
def get_info(drive: LocalDrive = Depends(get_drive), settings: Settings = Depends(get_settings)) -> FSInfo:
    """Disk usage of the drive and the file types that get real previews"""
    used, free = drive.stats()
    return FSInfo(
        stats=FSStats(free=free, total=free + used, used=used),
        features=FSFeatures(preview=settings.preview_features),
    )
