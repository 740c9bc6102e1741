import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.db.session import get_db, transaction
from app.core.config import settings
from app.core.security import create_access_token, create_refresh_token, get_password_hash, verify_password

from app.api.deps import get_current_user
from app.models.user import User
from app.models.notification import Notification
from app.schemas.common import MessageResponse
from app.schemas.user import (
    UserCreate,
    AdminCreate,
    UserUpdate,
    PasswordChange,
    Token,
    User as UserSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _build_token_response(user: User) -> Token:
    access_token = create_access_token(subject=str(user.id), role=user.role)
    refresh_token = create_refresh_token(subject=str(user.id))
    return Token(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        user=UserSchema.model_validate(user),
    )


def _ensure_unique_contact(db: Session, email: str, mobile_number: str, exclude_id=None):
    """Raise 400 if another account already uses this email or mobile number."""
    query = db.query(User).filter(
        or_(User.email == email, User.mobile_number == mobile_number)
    )
    if exclude_id:
        query = query.filter(User.id != exclude_id)
    existing = query.first()
    if not existing:
        return
    if existing.email == email:
        detail = "User with this email already exists"
    else:
        detail = "User with this mobile number already exists"
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _create_user(db: Session, body: UserCreate, role: str) -> User:
    _ensure_unique_contact(db, body.email, body.mobile_number)
    with transaction(db, conflict_detail="Email or mobile number already registered"):
        user = User(
            email=body.email,
            password_hash=get_password_hash(body.password),
            full_name=body.full_name,
            mobile_number=body.mobile_number,
            avatar_url=body.avatar_url,
            role=role,
        )
        db.add(user)
        db.flush()
        db.add(Notification(
            message=f"New user registered: {user.full_name} ({user.email})",
            type="user",
            reference_id=user.id,
        ))
    db.refresh(user)
    logger.info("Registered %s %s.", role, user.id)
    return user


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, db: Session = Depends(get_db)):
    user = _create_user(db, body, role="user")
    return _build_token_response(user)


@router.post("/admin/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def admin_register(body: AdminCreate, db: Session = Depends(get_db)):
    if body.admin_secret != settings.ADMIN_SECRET_KEY:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin secret",
        )
    user = _create_user(db, body, role="admin")
    return _build_token_response(user)


@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == form_data.username).first()
    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )
    return _build_token_response(user)


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    """Stateless JWTs: the client discards the token."""
    return MessageResponse(message="Successfully logged out")


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@router.get("/profile", response_model=UserSchema)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserSchema)
def update_profile(
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update full_name, mobile_number or avatar_url."""
    updates = data.model_dump(exclude_unset=True)
    if updates.get("mobile_number"):
        _ensure_unique_contact(db, current_user.email, updates["mobile_number"], exclude_id=current_user.id)

    with transaction(db, conflict_detail="Mobile number already registered"):
        for field, value in updates.items():
            setattr(current_user, field, value)
    db.refresh(current_user)
    return current_user


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    body: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not verify_password(body.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    with transaction(db):
        current_user.password_hash = get_password_hash(body.new_password)
    return MessageResponse(message="Password updated successfully")
