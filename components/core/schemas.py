"""Core schemas for the application."""

from pydantic import BaseModel


class HealthCheck(BaseModel):
    """Schema for health check response."""
    status: str


class AuthUser(BaseModel):
    """Authenticated NGO administrator."""
    id: str
    name: str
    email: str


class LoginRequest(BaseModel):
    """Schema for login request body."""
    email: str
    password: str


class LoginResponse(BaseModel):
    """Schema for a successful login."""
    token: str
    user: AuthUser


class MessageResponse(BaseModel):
    """Schema for plain message responses."""
    message: str
