"""Response helpers shared by the routes."""

from urllib.parse import quote

from fastapi import Response

from app.models.schemas import DownloadedFile


def attachment_response(downloaded: DownloadedFile) -> Response:
    """Send file bytes as an attachment."""
    return Response(
        content=downloaded.content,
        media_type=downloaded.mime_type or "application/octet-stream",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(downloaded.filename)}"
        },
    )
