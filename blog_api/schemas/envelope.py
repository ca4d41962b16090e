"""
Response envelope shared by every endpoint:
{success, message, data?, errors?}
"""
from typing import Any, Dict, List, Optional


def envelope(
    message: str = "",
    data: Optional[Any] = None,
    success: bool = True,
    errors: Optional[List[str]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    if errors is not None:
        body["errors"] = errors
    return body


def error_envelope(message: str, errors: Optional[List[str]] = None) -> Dict[str, Any]:
    return envelope(message=message, success=False, errors=errors)
