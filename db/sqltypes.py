import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Integer

# BIGINT identity on Postgres; SQLite only autoincrements INTEGER PRIMARY KEY.
BigIntPK = BigInteger().with_variant(Integer(), "sqlite")


def new_uuid() -> str:
    """Opaque row id for comments (string so it round-trips on any backend)."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
