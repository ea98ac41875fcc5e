from pydantic import BaseModel
from typing import Dict, Optional


class ErrorResponse(BaseModel):
    """Body of every non-2xx response"""
    error: str
    details: str
    fields: Optional[Dict[str, str]] = None
