from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class RealtimeMessage(BaseModel):
    action: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    data: Optional[Dict[str, Any]] = None
