"""
HTTP mapping for workflow results.

Routes call raise_for_failure() on every OperationResult so failures surface
as HTTPException with a status code per failure kind.
"""

from typing import Any, Dict

from fastapi import HTTPException
from pydantic import BaseModel

from zonecup.services.operation import OperationResult

STATUS_BY_CODE = {
    "precondition_failed": 409,
    "not_found": 404,
    "invalid_request": 400,
    "invalid_config": 422,
}


class OperationResponse(BaseModel):
    success: bool
    message: str
    data: Dict[str, Any] = {}


def raise_for_failure(result: OperationResult) -> OperationResponse:
    """
    Return the response body for a successful result.

    Raises:
        HTTPException with the mapped status (400 when the code is unknown)
    """
    if not result.success:
        raise HTTPException(
            status_code=STATUS_BY_CODE.get(result.code, 400),
            detail={"code": result.code, "message": result.message, **result.data},
        )
    return OperationResponse(success=True, message=result.message, data=result.data)
