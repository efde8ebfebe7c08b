"""Request/response schemas for login and registration."""

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    """Body of /api/login and /api/register. Missing fields arrive as empty strings."""

    username: str = ""
    password: str = ""


class LoginData(BaseModel):
    token: str
    username: str
