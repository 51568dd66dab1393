"""Common Routes — video upload into the temp area.

Invariants:
    - Multipart field name is "video"; ADMIN only
    - Response carries the generated file name to pass as movieFileName on POST /movie
"""

import time

from fastapi import APIRouter, Depends, File, UploadFile, status

from movie_catalog.api.dependencies import require_role
from movie_catalog.core.domain_types import Role
from movie_catalog.infrastructure.file_storage import FileStorage, get_file_storage
from movie_catalog.schemas.common import UploadResponse

router = APIRouter(prefix="/common", tags=["common"])


@router.post(
    "/video", response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(Role.ADMIN))],
)
async def create_video(
    video: UploadFile = File(...),
    storage: FileStorage = Depends(get_file_storage),
):
    file_name = await storage.save_upload(video, now_ms=int(time.time() * 1000))
    return {"file_name": file_name}
