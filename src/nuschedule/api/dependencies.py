import logging
import time
from typing import Generator, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.security import TokenError, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Dependency to get database session with performance monitoring"""
    start_time = time.time()
    session = request.app.state.storage.session()
    try:
        session_time = time.time() - start_time
        if session_time > 0.5:  # Log slow session creation
            logger.warning(f"Slow session creation: {session_time:.3f}s")
        yield session
    finally:
        session.close()


def get_current_student_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> int:
    """Student id from a `Authorization: Bearer <token>` header"""
    if credentials is None:
        raise HTTPException(status_code=401, detail="unauthorized")

    try:
        claims = decode_access_token(settings, credentials.credentials)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return claims["user_id"]
