# server/api/users.py

import logging
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, EmailStr

from api.auth import get_password_hash, require_admin
from config import DEFAULT_PASSWORD
from core.storage import CollectionRepository, new_id, utc_now
from database import get_user_repository
from models.user import User, UserOut, UserRole


logger = logging.getLogger(__name__)

# Every route in this module requires the ADMIN role
router = APIRouter(dependencies=[Depends(require_admin)])

MAIN_ADMIN_USERNAME = "admin"


class CreateUserRequest(BaseModel):
    username: str
    email: EmailStr
    role: UserRole = UserRole.USER


class ResetPasswordRequest(BaseModel):
    password: str


def get_user_or_404(users: CollectionRepository[User], user_id: str) -> User:
    user = users.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/users", response_model=list[UserOut])
def list_users(users: CollectionRepository[User] = Depends(get_user_repository)):
    return [u.to_public() for u in users.get_all()]


@router.post("/users", response_model=UserOut)
def create_user(req: CreateUserRequest, users: CollectionRepository[User] = Depends(get_user_repository)):
    """
    Creates an active account with the default password.
    """
    username = req.username.strip()
    if not username:
        raise HTTPException(status_code=400, detail="Username is required.")
    if any(u.username == username for u in users.get_all()):
        raise HTTPException(status_code=400, detail="Username already exists.")

    user = User(
        id=new_id(),
        username=username,
        email=req.email,
        role=req.role,
        is_active=True,
        password_hash=get_password_hash(DEFAULT_PASSWORD),
        created_at=utc_now(),
    )
    users.upsert(user)
    logger.info("Created %s account %s", user.role.value, user.username)
    return user.to_public()


@router.post("/users/{user_id}/toggle", response_model=UserOut)
def toggle_user_status(user_id: str, users: CollectionRepository[User] = Depends(get_user_repository)):
    user = get_user_or_404(users, user_id)
    if user.username == MAIN_ADMIN_USERNAME:
        raise HTTPException(status_code=400, detail="Cannot disable the main admin.")

    updated = user.model_copy(update={"is_active": not user.is_active})
    users.upsert(updated)
    logger.info("User %s is now %s", user.username, "active" if updated.is_active else "disabled")
    return updated.to_public()


@router.post("/users/{user_id}/password")
def reset_password(
    user_id: str,
    req: ResetPasswordRequest,
    users: CollectionRepository[User] = Depends(get_user_repository),
):
    user = get_user_or_404(users, user_id)
    if not req.password:
        raise HTTPException(status_code=400, detail="Password is required.")

    users.upsert(user.model_copy(update={"password_hash": get_password_hash(req.password)}))
    logger.info("Password reset for %s", user.username)
    return {"status": "success", "message": "Password updated."}
