"""
Customer request/response schemas.

Request fields are optional so that missing values reach the service and
produce a 400 rather than a schema validation error.
"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel


class RegisterRequest(BaseModel):
    """Customer registration request."""

    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Customer login request."""

    email: Optional[str] = None
    password: Optional[str] = None


class RegisteredCustomer(BaseModel):
    id: str
    email: str
    username: str
    image: Optional[str] = None


class CustomerSummary(BaseModel):
    customer_id: str
    email: Optional[str] = None
    username: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None


class CustomerProfile(CustomerSummary):
    createdAt: Optional[str] = None


class RegisterResponse(BaseModel):
    message: str
    token: str
    customer: RegisteredCustomer


class LoginResponse(BaseModel):
    message: str
    customer: CustomerSummary
    token: str


class ProfileResponse(BaseModel):
    customer: CustomerProfile


class UpdateProfileResponse(BaseModel):
    message: str
    customer: CustomerSummary


class MessageResponse(BaseModel):
    message: str


class CustomerListResponse(BaseModel):
    success: bool = True
    list: List[Dict[str, Any]]
