"""
Shared schema primitives used across the API.
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Standard error envelope returned for all 4xx/5xx responses."""
    model_config = ConfigDict(from_attributes=True)

    code: str
    message: str
    details: Optional[dict[str, Any]] = None


def strip_required(value: Any, field_name: str) -> Any:
    """Strip a text field and reject it if nothing is left."""
    stripped = value.strip() if isinstance(value, str) else value
    if isinstance(stripped, str) and not stripped:
        raise ValueError(f"{field_name} must not be empty after stripping whitespace")
    return stripped
