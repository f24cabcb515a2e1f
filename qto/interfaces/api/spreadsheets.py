"""Spreadsheet API routes — export/import a project's QTO items as .xlsx."""

from urllib.parse import quote

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response

from qto.application.services.qto_spreadsheet import export_project_to_xlsx, import_qto_from_xlsx
from qto.core.exceptions import ParseError
from qto.domain.repositories.project_repository import ProjectRepository
from qto.domain.repositories.qto_item_repository import QTOItemRepository
from qto.domain.schemas.auth import SessionUser
from qto.domain.schemas.common import ImportResult
from qto.interfaces.api.deps import get_current_user
from qto.interfaces.deps import get_project_repository, get_qto_item_repository

router = APIRouter(prefix="/projects", tags=["Spreadsheets"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _content_disposition(filename: str) -> str:
    ascii_name = filename.encode("ascii", "ignore").decode("ascii")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


@router.get("/{project_id}/export")
def export_project(
    project_id: int,
    project_repo: ProjectRepository = Depends(get_project_repository),
    item_repo: QTOItemRepository = Depends(get_qto_item_repository),
    user: SessionUser = Depends(get_current_user),
):
    filename, content = export_project_to_xlsx(project_repo, item_repo, project_id, user)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@router.post("/{project_id}/import", response_model=ImportResult)
async def import_project_items(
    project_id: int,
    file: UploadFile = File(...),
    project_repo: ProjectRepository = Depends(get_project_repository),
    item_repo: QTOItemRepository = Depends(get_qto_item_repository),
    user: SessionUser = Depends(get_current_user),
):
    if not file.filename:
        raise ParseError("No file was uploaded.")

    ext = file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
    if ext != "xlsx":
        raise ParseError("Only .xlsx files are accepted.")

    content = await file.read()
    return import_qto_from_xlsx(project_repo, item_repo, project_id, user, content)
