import logging

from pydantic import BaseModel, ConfigDict, field_validator

log = logging.getLogger(__name__)


class UserCreate(BaseModel):
    """User creation schema.

    This schema is used when a new user registers, and as the insert shape
    handed to storage. The route layer replaces the plain password with a
    bcrypt hash before calling storage.

    Attributes:
        username (str): Unique, non-empty username.
        password (str): The password. Stored as given by storage.

    """

    model_config = ConfigDict(extra="ignore")

    username: str
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str):
        """Validate the username field.

        Args:
            v (str): The username value to validate.

        Returns:
            str: The username stripped of leading/trailing whitespace.

        Raises:
            ValueError: If the username is empty after stripping whitespace.

        """
        if not v.strip():
            raise ValueError("username must not be empty")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str):
        """Reject empty passwords."""
        if not v:
            raise ValueError("password must not be empty")
        return v


class User(BaseModel):
    """A stored user.

    Attributes:
        id (int): Server-assigned identifier.
        username (str): Unique username.
        password (str): The stored password value (a bcrypt hash when created through the API).

    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    password: str


class UserResponse(BaseModel):
    """User response schema without password."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class Token(BaseModel):
    """Token response schema.

    Attributes:
        access_token (str): The JWT access token used for subsequent authenticated requests.
        token_type (str): The type of token, which is always "bearer".

    """

    access_token: str
    token_type: str
