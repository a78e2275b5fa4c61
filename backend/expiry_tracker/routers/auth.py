from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from expiry_tracker.config import get_settings
from expiry_tracker.database import get_db
from expiry_tracker.schemas.auth import SessionResponse, UserResponse
from expiry_tracker.services.auth import end_session, get_session_user
from expiry_tracker.utils.auth import get_session_token

router = APIRouter()


@router.get("/session", response_model=SessionResponse)
def session(token: str | None = Depends(get_session_token), db: Session = Depends(get_db)):
    resolved = get_session_user(db, token)
    if resolved is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    user, user_session = resolved
    return SessionResponse(user=UserResponse.model_validate(user), expires=user_session.expires)


@router.post("/signout")
def signout(
    response: Response,
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
):
    ended = end_session(db, token)
    response.delete_cookie(get_settings().SESSION_COOKIE_NAME)
    return {"success": ended}
