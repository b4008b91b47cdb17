"""Shared response envelope schemas"""

from typing import Any, Generic, TypeVar
from urllib.parse import quote

from fastapi.responses import StreamingResponse
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: {"success": true, "data": ...}"""

    success: bool = True
    data: T


class MessageData(BaseModel):
    message: str


def ok(data: Any) -> dict:
    return {"success": True, "data": data}


UTF8_BOM = "\ufeff"


def csv_attachment(body: str, filename: str) -> StreamingResponse:
    """
    CSV download: UTF-8 with BOM so spreadsheet tools detect the encoding,
    filename percent-encoded for the Content-Disposition header.
    """
    encoded_name = quote(filename, safe="!*'()")
    return StreamingResponse(
        iter([UTF8_BOM + body]),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{encoded_name}"',
            "Cache-Control": "no-cache",
        },
    )
