# cuervo/core/json.py
from typing import Any
import json
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

class UTF8JSONResponse(JSONResponse):
    """
    JSON en UTF-8 sin escapes ASCII: los nombres con tildes y eñes
    (Nombre Completo, Seguro Médico...) salen tal cual.
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        payload = jsonable_encoder(content)
        return json.dumps(
            payload,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
