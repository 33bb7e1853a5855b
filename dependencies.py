from fastapi import Header, HTTPException, status
from typing import Callable, Optional
from sqlalchemy.orm import Session
from database import SessionLocal

# Authentication lives with the hosted auth provider; it forwards an opaque user id.
def get_optional_user_id(x_user_id: Optional[str] = Header(default=None)) -> Optional[str]:
    if x_user_id is None:
        return None
    user_id = x_user_id.strip()
    return user_id or None

def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    user_id = get_optional_user_id(x_user_id)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sign in to view saved assessments"
        )
    return user_id

def get_session_factory() -> Callable[[], Session]:
    return SessionLocal
