"""Response envelope and the shared base for API schemas.

Every endpoint answers ``{"success": bool, "data": ..., "message": ...}`` and
speaks camelCase on the wire while the Python side stays snake_case.
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request and response schemas: camelCase aliases, snake_case names both accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, list):
        return [_dump(v) for v in value]
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    return jsonable_encoder(value)


def ok(data: Any = None, message: str | None = None, status_code: int = 200, **extra: Any) -> JSONResponse:
    content: dict[str, Any] = {"success": True}
    if data is not None:
        content["data"] = _dump(data)
    if message is not None:
        content["message"] = message
    for key, value in extra.items():
        content[key] = _dump(value)
    return JSONResponse(status_code=status_code, content=content)


def fail(message: str, status_code: int, errors: Any = None) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = jsonable_encoder(errors)
    return JSONResponse(status_code=status_code, content=content)
