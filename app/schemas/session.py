from typing import Optional
from pydantic import BaseModel


class SessionUser(BaseModel):
    id: str
    email: Optional[str] = None


class SessionState(BaseModel):
    loading: bool = True
    user: Optional[SessionUser] = None
