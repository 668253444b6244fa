"""
Authentication Router

The identity provider behind the authorization gate:
- Registration (email/password → user account + member record)
- Login (email/password → JWT access token)
- Current principal (from the JWT token)

Security:
=========
- Passwords are hashed with passlib before storage
- Plain text passwords are never logged or stored
- The access token carries the user id, email and role names, so the gate
  can decide on every request without a database lookup
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from library_catalog.config import get_settings
from library_catalog.dependencies import AuthenticatedPrincipal, CatalogGateway
from library_catalog.errors import ValidationFailed
from library_catalog.models import Member, User
from library_catalog.schemas import (
    MemberResponse,
    PrincipalResponse,
    TokenResponse,
    UserCreate,
)
from library_catalog.services.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from library_catalog.validation import validate_fields

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Unauthorized"},
        409: {"description": "Conflict (email already registered)"},
    },
)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new member",
    description="""
    Create a sign-in account and the matching member record.

    **Password Requirements:**
    - Minimum 8 characters
    - At least 1 uppercase letter
    - At least 1 lowercase letter
    - At least 1 number

    New accounts carry no roles; administrators are seeded separately.
    """,
)
def register(user_data: UserCreate, gateway: CatalogGateway) -> MemberResponse:
    """
    Register a user and its member in one unit of work.

    1. Validates email and password format (handled by Pydantic)
    2. Validates the member fields against the member rules
    3. Checks for a duplicate email
    4. Creates the user (hashed password) and the linked member
    """
    member_values = user_data.model_dump(exclude={"password"})
    errors = validate_fields("member", member_values)
    if errors:
        raise ValidationFailed(errors)

    # UserCreate has already lower-cased the address
    email = user_data.email
    existing = gateway.first(User, User.email == email) or gateway.first(
        Member, Member.email == email
    )

    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    with gateway.atomic():
        user = gateway.add(
            User(
                email=email,
                hashed_password=hash_password(user_data.password),
                is_active=True,
            )
        )
        member = gateway.add(
            Member(
                first_name=user_data.first_name,
                last_name=user_data.last_name,
                address=user_data.address,
                phone=user_data.phone,
                email=email,
                user_id=user.id,
            )
        )

    logger.info(f"New member registered: {email}")

    return MemberResponse.model_validate(member)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a JWT access token.

    **Usage:**
    Include the access token in the Authorization header:
    ```
    Authorization: Bearer <access_token>
    ```

    **Note:** Use email address in the 'username' field (OAuth2 standard).
    """,
)
def login(
    gateway: CatalogGateway,
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> TokenResponse:
    """
    Authenticate a user and return an access token.

    Uses OAuth2 password flow (form data with username/password).
    """
    email = form_data.username.lower()

    user = gateway.first(User, User.email == email)

    if not user or not verify_password(form_data.password, user.hashed_password):
        logger.warning(f"Login failed for {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        logger.warning(f"Login failed: inactive account {email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )

    access_token = create_access_token(
        {"sub": str(user.id), "email": user.email, "roles": user.role_names}
    )

    logger.info(f"User logged in: {user.email}")

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
    )


# -------------------------------------------------------------------------
# Current Principal Endpoint
# -------------------------------------------------------------------------
@router.get(
    "/me",
    response_model=PrincipalResponse,
    summary="Get the current principal",
)
def read_current_principal(
    principal: AuthenticatedPrincipal,
    gateway: CatalogGateway,
) -> PrincipalResponse:
    """The signed-in caller, with the id of their member record if any."""
    member = gateway.first(Member, Member.user_id == principal.user_id)

    return PrincipalResponse(
        user_id=principal.user_id,
        email=principal.email,
        roles=sorted(principal.roles),
        member_id=member.id if member else None,
    )
