"""
Admin Router - user management.

Endpoints:
  GET    /users      - every user with groceries/sessions/accounts counts
  DELETE /users/{id} - delete a user and their linked rows
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from expiry_tracker.database import get_db
from expiry_tracker.models.user import User
from expiry_tracker.schemas.auth import AdminUserResponse
from expiry_tracker.services.auth import delete_user, list_users_with_counts
from expiry_tracker.utils.auth import get_current_user

router = APIRouter()


@router.get("/users", response_model=list[AdminUserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_users_with_counts(db)


@router.delete("/users/{user_id}")
def remove_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    if not delete_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True}
