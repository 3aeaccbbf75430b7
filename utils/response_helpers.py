from typing import Any, Optional

from fastapi.responses import JSONResponse

def success_response(data: Any, status_code: int = 200):
    return JSONResponse(
        content={"success": True, "data": data, "error": None},
        status_code=status_code
    )

def error_response(message: str, status_code: int = 500, details: Optional[Any] = None):
    content = {"success": False, "data": None, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(content=content, status_code=status_code)
