from typing import Any

from fastapi import Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from spoti_web.core import OperationResult

from .credentials import credential_headers


def data_response(result: OperationResult, data: Any = None) -> JSONResponse:
    """
    JSON body ``{credentials, data}``; the credentials are echoed in the
    response headers as well.
    """
    payload = {
        "credentials": result.credentials.to_dict(),
        "data": jsonable_encoder(result.data if data is None else data),
    }
    return JSONResponse(
        content=payload, headers=credential_headers(result.credentials)
    )


def credentials_response(result: OperationResult) -> JSONResponse:
    return JSONResponse(
        content={"credentials": result.credentials.to_dict()},
        headers=credential_headers(result.credentials),
    )


def empty_response(result: OperationResult) -> Response:
    return Response(status_code=200, headers=credential_headers(result.credentials))
