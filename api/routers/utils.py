# api/routers/utils.py
import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def like_pattern(text: str) -> str:
    """Case-insensitive 'contains' pattern with LIKE wildcards escaped (use escape='\\')."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def commit_or_http(db: Session, action: str) -> None:
    """Commit, or roll back and surface the database message to the caller."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("%s: %s", action, e.orig)
        raise HTTPException(status_code=409, detail=f"{action}: {e.orig}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("%s: %s", action, e)
        raise HTTPException(status_code=500, detail=f"{action}: {e}")
