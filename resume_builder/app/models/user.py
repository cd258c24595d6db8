import logging

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship, validates

from resume_builder.app.models import Base

log = logging.getLogger(__name__)


class User(Base):
    """
    User table row.

    Attributes:
        id (int): Unique identifier for the user, assigned by the database sequence.
        username (str): Unique username for the user.
        password (str): The stored password value, as handed to storage.
        resumes (list[Resume]): Resumes owned by the user.

    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)

    resumes = relationship(
        "Resume",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __init__(self, username: str, password: str, id: int | None = None):
        """
        Initialize a User instance.

        Args:
            username (str): Unique username for the user. Must be a non-empty string.
            password (str): The password value to store. Must be a non-empty string.
            id (int | None): The unique identifier of the user, for testing purposes.

        Returns:
            None

        Notes:
            1. Assign all values to instance attributes; validators run on assignment.
            2. This operation does not involve network, disk, or database access.

        """
        _msg = f"Initializing User with username: {username}"
        log.debug(_msg)

        if id is not None:
            self.id = id
        self.username = username
        self.password = password

    @validates("username")
    def validate_username(self, key, username):
        """
        Validate the username field.

        Args:
            key (str): The field name being validated (should be 'username').
            username (str): The username value to validate. Must be a non-empty string.

        Returns:
            str: The validated username (stripped of leading/trailing whitespace).

        """
        if not isinstance(username, str):
            raise ValueError("Username must be a string")
        if not username.strip():
            raise ValueError("Username cannot be empty")
        return username.strip()

    @validates("password")
    def validate_password(self, key, password):
        if not isinstance(password, str) or not password:
            raise ValueError("Password cannot be empty")
        return password
