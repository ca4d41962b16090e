import logging

from fastapi import APIRouter, Depends, status

from blog_api.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from blog_api.core.security import create_access_token, hash_password, verify_password
from blog_api.dependencies import get_current_user, get_user_repository
from blog_api.repositories import UserRepository
from blog_api.schemas import LoginRequest, ProfileUpdateRequest, RegisterRequest, UserRecord, envelope

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Authentication"])

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, users: UserRepository = Depends(get_user_repository)):
    """
    Register a new user account

    - Reports every validation problem at once
    - Rejects an email or username that is already in use
    - Hashes password before storing
    - Returns the user and an access token
    """

    if users.find_by_email(payload.email):
        raise ConflictError("User with this email already exists")

    if users.find_by_username(payload.username):
        raise ConflictError("Username already taken")

    user = users.create(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
    )

    logger.info(f"New user registered: {user.username} (ID: {user.id})")

    return envelope(
        message="User registered successfully",
        data={"user": user.serialize(), "token": create_access_token(user.id, user.email)},
    )


@router.post("/login")
def login(payload: LoginRequest, users: UserRepository = Depends(get_user_repository)):
    """
    Login with email and password

    Unknown email, deactivated account and wrong password all get the same answer
    """

    user = users.find_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning(f"Failed login attempt for {payload.email!r}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    logger.info(f"User logged in: {user.email}")

    return envelope(
        message="Login successful",
        data={"user": user.serialize(), "token": create_access_token(user.id, user.email)},
    )


@router.get("/profile")
def get_profile(current_user: UserRecord = Depends(get_current_user)):
    return envelope(message="Profile retrieved successfully", data={"user": current_user.serialize()})


@router.put("/profile")
def update_profile(
    payload: ProfileUpdateRequest,
    current_user: UserRecord = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Update firstName / lastName / avatarUrl; omitted fields are left as they are"""

    user = users.update(current_user.id, payload.provided_fields())
    if user is None:
        raise NotFoundError("User not found")

    logger.info(f"Profile updated: {user.username} (ID: {user.id})")

    return envelope(message="Profile updated successfully", data={"user": user.serialize()})
