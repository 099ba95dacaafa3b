from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.db.session import get_session
from app.domains.time_entries.service import export_rows
from timerecording.exporter import default_export_name, write_entries_xlsx

router = APIRouter(prefix="/export", tags=["export"])
logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/entries")
def export_entries(manager: Optional[str] = None, db: Session = Depends(get_session)) -> StreamingResponse:
    buffer = BytesIO()
    count = write_entries_xlsx(export_rows(db, manager), buffer)
    buffer.seek(0)
    filename = default_export_name(manager, date.today())
    logger.info("export_written", manager=manager or "GLOBAL", rows=count, filename=filename)
    return StreamingResponse(
        buffer,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
