from typing import Any, Dict, Optional


def ok(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def failure(message: str, error: str, data: Any = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message, "error": error}
    if data is not None:
        body["data"] = data
    return body
