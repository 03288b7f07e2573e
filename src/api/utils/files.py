from urllib.parse import quote

from fastapi import Response, UploadFile

from src.app.use_cases.documents import FileDownload, UploadedFile


async def read_upload(file: UploadFile, max_bytes: int) -> UploadedFile:
    """Read at most one byte past the limit so oversize files are detected without buffering them"""
    data = await file.read(max_bytes + 1)
    return UploadedFile(
        filename=file.filename or "upload",
        content_type=file.content_type or "",
        data=data,
    )


def file_response(download: FileDownload) -> Response:
    ascii_name = download.filename.encode("ascii", "ignore").decode() or "download"
    disposition = f'inline; filename="{ascii_name}"'
    if ascii_name != download.filename:
        disposition += f"; filename*=UTF-8''{quote(download.filename)}"
    return Response(
        content=download.data,
        media_type=download.content_type or "application/octet-stream",
        headers={"Content-Disposition": disposition},
    )
