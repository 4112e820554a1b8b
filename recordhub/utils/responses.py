from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse


def error_body(error: str, details: Optional[str] = None) -> Dict[str, Any]:
    """Failure envelope: ``{"error": ..., "details"?: ...}``."""
    body: Dict[str, Any] = {"error": error}
    if details:
        body["details"] = details
    return body


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    """Create a JSON error response in the standard failure envelope."""
    return JSONResponse(status_code=status_code, content=error_body(error, details))
