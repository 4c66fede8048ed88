from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class SessionSummary(BaseModel):
    """Session as listed to its owner (no key, no hash)"""

    id: str
    ip: str
    user_agent: Optional[str] = None
    created_at: datetime
    last_active_at: Optional[datetime] = None
    current: bool = False


class SessionListResponse(BaseModel):
    sessions: List[SessionSummary]


class DeleteSessionResponse(BaseModel):
    message: str
    session_id: str
