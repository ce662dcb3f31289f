from typing import Any, Optional, Sequence
from pydantic import BaseModel

class ResponseModel(BaseModel):
    code: int = 200
    message: str = "success"
    data: Optional[Any] = None

    @staticmethod
    def success(data: Any = None):
        return {"code": 200, "message": "success", "data": data}

    @staticmethod
    def fail(code: int = 400, message: str = "error", data: Any = None):
        return {"code": code, "message": message, "data": data}

    @staticmethod
    def paginated(items: Sequence[Any], page: int, limit: int, total: int):
        """Page of items with the pagination block (totalPages rounds up)."""
        return ResponseModel.success(data={
            "count": len(items),
            "pagination": {
                "page": page,
                "limit": limit,
                "totalPages": (total + limit - 1) // limit,
                "totalItems": total,
            },
            "items": list(items),
        })
