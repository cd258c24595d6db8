import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from resume_builder.app.schemas.resume import ResumeContent

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class FieldError:
    """A single violated field.

    Attributes:
        path (str): Dotted location of the field using wire names, e.g. "personalInfo.email".
            Empty when the input as a whole has the wrong type.
        message (str): Human-readable description of the violation.
        type (str): Machine-readable violation kind, e.g. "missing", "string_type", "value_error".

    """

    path: str
    message: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message, "type": self.type}


@dataclass
class ValidationResult(Generic[ModelT]):
    """Outcome of checking untrusted input against a schema.

    Attributes:
        success (bool): True when the input matched the schema.
        data (ModelT | None): The parsed value on success, otherwise None.
        errors (list[FieldError]): Every violation on failure, otherwise empty.

    """

    success: bool
    data: ModelT | None = None
    errors: list[FieldError] = field(default_factory=list)

    def to_response(self, message: str = "Invalid resume content") -> dict[str, Any]:
        """Build the JSON body returned to clients for a failed validation.

        Args:
            message (str): Summary message placed at the top of the body.

        Returns:
            dict[str, Any]: `{"message": ..., "errors": [{"path", "message", "type"}, ...]}`.

        """
        return {
            "message": message,
            "errors": [error.to_dict() for error in self.errors],
        }


def _format_location(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def validate_model(model: type[ModelT], data: Any) -> ValidationResult[ModelT]:
    """Check arbitrary input against a pydantic model without raising.

    Args:
        model (type[ModelT]): The pydantic model class describing the expected shape.
        data (Any): Untrusted input, usually decoded JSON.

    Returns:
        ValidationResult[ModelT]: The parsed model on success, or every field error on failure.

    Notes:
        1. Validate `data` with `model.model_validate`.
        2. On success return the model instance; unknown keys are dropped by the model config.
        3. On `ValidationError`, convert each reported error into a `FieldError`
           with a dotted path built from the error location.
        4. This function is pure; no disk, network, or database access.

    """
    try:
        parsed = model.model_validate(data)
    except ValidationError as e:
        errors = [
            FieldError(
                path=_format_location(error["loc"]),
                message=error["msg"],
                type=error["type"],
            )
            for error in e.errors()
        ]
        _msg = f"Validation against {model.__name__} failed with {len(errors)} error(s)"
        log.debug(_msg)
        return ValidationResult(success=False, errors=errors)

    return ValidationResult(success=True, data=parsed)


def validate_resume_content(data: Any) -> ValidationResult[ResumeContent]:
    """Check untrusted input against the ResumeContent shape.

    Args:
        data (Any): Untrusted input, usually the `content` member of a request body.

    Returns:
        ValidationResult[ResumeContent]: See `validate_model`.

    """
    return validate_model(ResumeContent, data)
