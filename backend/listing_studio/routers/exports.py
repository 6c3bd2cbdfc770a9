from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from listing_studio.database import get_db
from listing_studio.schemas.export import ExportRequest
from listing_studio.services import export_service
from listing_studio.utils.exceptions import InputValidationError, NotFoundError

router = APIRouter(prefix="/exports")

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _export(
    db: Session,
    body: ExportRequest,
    build: Callable[..., bytes],
    media_type: str,
    extension: str,
) -> Response:
    try:
        template = export_service.parse_template(body.template)
        snapshot, contents = export_service.load_export(db, body.property_id, body.content_ids)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    filename = f"property_{body.property_id}_{template}.{extension}"
    return Response(
        content=build(snapshot, contents, template),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/pdf")
def export_pdf(body: ExportRequest, db: Session = Depends(get_db)) -> Response:
    return _export(db, body, export_service.build_pdf, "application/pdf", "pdf")


@router.post("/docx")
def export_docx(body: ExportRequest, db: Session = Depends(get_db)) -> Response:
    return _export(db, body, export_service.build_docx, DOCX_MEDIA_TYPE, "docx")
