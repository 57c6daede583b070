"""Document export endpoints for Web API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..deps import get_store
from ....errors import APIError
from ....store import InMemorySessionStore
from .....domain.exporter import EXPORT_FORMATS, export_filename

router = APIRouter(prefix="/sessions", tags=["export"])


@router.get("/{session_id}/export/{fmt}")
async def export_document(
    session_id: str,
    fmt: str,
    store: InMemorySessionStore = Depends(get_store),
) -> Response:
    media_type = EXPORT_FORMATS.get(fmt)
    if media_type is None:
        raise APIError(404, "UNSUPPORTED_FORMAT", f"Unsupported export format: {fmt}", {"format": fmt})

    exported = await store.export(session_id, fmt)
    filename = export_filename(exported["title"], fmt)
    # Print view opens in the browser; the others download.
    disposition = "inline" if fmt == "html" else "attachment"
    return Response(
        content=exported["content"],
        media_type=media_type,
        headers={"Content-Disposition": f'{disposition}; filename="{filename}"'},
    )
