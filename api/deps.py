from typing import Generator, Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session
from db.engine import get_session_factory
from db.models import Profile


def get_db() -> Generator[Session, None, None]:
    db = get_session_factory()()  # Create a new database session
    try:
        yield db  # Yield the session to be used in the request
    finally:
        db.close()  # Ensure the session is closed after the request is done


def get_current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    db: Session = Depends(get_db),
) -> Profile:
    """The signed-in profile, as identified by the upstream auth layer."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Not signed in")
    profile = db.get(Profile, x_user_id.strip())
    if profile is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return profile
