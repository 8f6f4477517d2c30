from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Shape of every response body, success or failure"""

    success: bool = True
    message: str = ""
    data: Optional[T] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)


def ok(data: T = None, message: str = "") -> Envelope[T]:
    return Envelope(success=True, message=message, data=data)


def failure(message: str, errors: Optional[Dict[str, List[str]]] = None) -> dict:
    return Envelope(success=False, message=message, errors=errors or {}).model_dump(
        mode="json"
    )
