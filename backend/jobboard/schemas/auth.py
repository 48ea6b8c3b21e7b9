from pydantic import BaseModel
from typing import Optional


class CurrentUserResponse(BaseModel):
    authenticated: bool
    user_id: Optional[str] = None
    is_admin: bool = False
