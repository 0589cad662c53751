"""
FastAPI router for Customer endpoints.

Provides registration, login, profile management and the admin listing.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from common.utils.exceptions import BadRequestException
from customer_api.config import settings
from customer_api.auth.dependencies import require_auth, require_admin
from customer_api.auth.identity import IdentityContext
from customer_api.customer.dependencies import get_customer_service
from customer_api.customer.services.customer_service import CustomerService
from customer_api.customer.models import (
    RegisterRequest,
    LoginRequest,
    RegisterResponse,
    LoginResponse,
    ProfileResponse,
    UpdateProfileResponse,
    MessageResponse,
    CustomerListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["customers"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
):
    """Register a new customer and return a token."""
    result = await customer_service.register(
        email=body.email,
        username=body.username,
        password=body.password,
    )

    return RegisterResponse(message="Registration successful", **result)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
):
    """Authenticate a customer and return a token."""
    result = await customer_service.login(email=body.email, password=body.password)

    return LoginResponse(message="Login successful", **result)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    identity: Annotated[IdentityContext, Depends(require_auth)],
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
):
    """Get the authenticated customer's profile."""
    customer = await customer_service.get_profile(identity)

    return ProfileResponse(customer=customer)


@router.put("/profile/{customer_id}", response_model=UpdateProfileResponse)
async def update_profile(
    customer_id: str,
    identity: Annotated[IdentityContext, Depends(require_auth)],
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
    username: Annotated[Optional[str], Form()] = None,
    email: Annotated[Optional[str], Form()] = None,
    phone: Annotated[Optional[str], Form()] = None,
    password: Annotated[Optional[str], Form()] = None,
    image: Annotated[Optional[UploadFile], File()] = None,
):
    """
    Update a customer profile.

    Accepts multipart form data; only provided fields are changed.
    An optional image file replaces the profile picture.
    """
    image_bytes = None
    if image is not None:
        # Read at most one byte past the limit
        image_bytes = await image.read(settings.MAX_IMAGE_SIZE_BYTES + 1)
        if len(image_bytes) > settings.MAX_IMAGE_SIZE_BYTES:
            raise BadRequestException(
                message="File too large",
                code="FILE_TOO_LARGE"
            )

    customer = await customer_service.update_profile(
        customer_id=customer_id,
        updates={
            "username": username,
            "email": email,
            "phone": phone,
            "password": password,
        },
        image=image_bytes or None,
    )

    return UpdateProfileResponse(message="Profile updated successfully", customer=customer)


@router.delete("/profile/{customer_id}", response_model=MessageResponse)
async def delete_profile(
    customer_id: str,
    identity: Annotated[IdentityContext, Depends(require_auth)],
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
):
    """Delete a customer profile."""
    await customer_service.delete_profile(customer_id)

    return MessageResponse(message="Profile deleted successfully")


@router.get("/customer", response_model=CustomerListResponse)
async def list_customers(
    identity: Annotated[IdentityContext, Depends(require_admin)],
    customer_service: Annotated[CustomerService, Depends(get_customer_service)],
):
    """List all customers (admin only)."""
    customers = await customer_service.list_all(identity)

    return CustomerListResponse(success=True, list=customers)
