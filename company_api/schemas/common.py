# company_api/schemas/common.py
from pydantic import BaseModel
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = "Success"
    data: Optional[T] = None

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    details: Optional[Any] = None
