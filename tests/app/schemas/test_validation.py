import pytest

from resume_builder.app.schemas.resume import ResumeContent
from resume_builder.app.schemas.user import UserCreate
from resume_builder.app.schemas.validation import (
    FieldError,
    validate_model,
    validate_resume_content,
)


def _paths(result):
    return {error.path for error in result.errors}


def test_valid_content_returns_equivalent_value(resume_content):
    """Valid content parses to a model that dumps back to the same JSON."""
    result = validate_resume_content(resume_content)

    assert result.success is True
    assert result.errors == []
    assert isinstance(result.data, ResumeContent)
    assert result.data.model_dump(by_alias=True) == resume_content


def test_extra_fields_are_dropped(resume_content):
    """Unknown keys at any depth are removed from the parsed value."""
    expected = {**resume_content}
    resume_content["favoriteColor"] = "green"
    resume_content["personalInfo"] = {
        **resume_content["personalInfo"],
        "nickname": "Al",
    }
    resume_content["experience"][0]["salary"] = 100

    result = validate_resume_content(resume_content)

    assert result.success is True
    dumped = result.data.model_dump(by_alias=True)
    assert "favoriteColor" not in dumped
    assert "nickname" not in dumped["personalInfo"]
    assert "salary" not in dumped["experience"][0]
    assert dumped["summary"] == expected["summary"]


def test_snake_case_input_is_accepted(resume_content):
    """Python attribute names are accepted as well as the camelCase wire names."""
    info = resume_content.pop("personalInfo")
    resume_content["personal_info"] = {
        "full_name": info["fullName"],
        "email": info["email"],
        "phone": info["phone"],
        "location": info["location"],
    }

    result = validate_resume_content(resume_content)

    assert result.success is True
    assert result.data.personal_info.full_name == "Alice Example"


def test_missing_email_is_reported_by_path(resume_content):
    """A missing nested field is reported with its dotted camelCase path."""
    del resume_content["personalInfo"]["email"]

    result = validate_resume_content(resume_content)

    assert result.success is False
    assert result.data is None
    assert FieldError(
        path="personalInfo.email",
        message="Field required",
        type="missing",
    ) in result.errors


def test_invalid_email_format_is_reported(resume_content):
    """A syntactically invalid email fails the format check."""
    resume_content["personalInfo"]["email"] = "not-an-email"

    result = validate_resume_content(resume_content)

    assert result.success is False
    assert _paths(result) == {"personalInfo.email"}
    assert result.errors[0].type == "value_error"


def test_every_violation_is_enumerated(resume_content):
    """All violations are reported together, not just the first."""
    del resume_content["summary"]
    resume_content["skills"] = "Python"
    resume_content["experience"][0]["title"] = 42
    del resume_content["education"][0]["school"]

    result = validate_resume_content(resume_content)

    assert result.success is False
    assert _paths(result) == {
        "summary",
        "skills",
        "experience.0.title",
        "education.0.school",
    }
    types = {error.path: error.type for error in result.errors}
    assert types["summary"] == "missing"
    assert types["skills"] == "list_type"
    assert types["experience.0.title"] == "string_type"


@pytest.mark.parametrize("value", [None, "a resume", 42, ["list"]])
def test_non_object_input_is_reported_not_raised(value):
    """Input of the wrong type as a whole is a failed result, not an exception."""
    result = validate_resume_content(value)

    assert result.success is False
    assert len(result.errors) == 1
    assert result.errors[0].path == ""


def test_empty_object_reports_all_required_fields():
    """An empty object reports every top-level required field as missing."""
    result = validate_resume_content({})

    assert result.success is False
    assert _paths(result) == {
        "personalInfo",
        "summary",
        "experience",
        "education",
        "skills",
    }
    assert all(error.type == "missing" for error in result.errors)


def test_to_response_shape(resume_content):
    """The 400 body lists path, message, and type for each error."""
    del resume_content["personalInfo"]["email"]

    body = validate_resume_content(resume_content).to_response()

    assert body["message"] == "Invalid resume content"
    assert body["errors"] == [
        {"path": "personalInfo.email", "message": "Field required", "type": "missing"},
    ]


def test_validate_model_user_insert():
    """The generic helper validates other shapes, such as the user insert shape."""
    ok = validate_model(UserCreate, {"username": "  alice ", "password": "pw1", "role": "x"})
    assert ok.success is True
    assert ok.data.username == "alice"
    assert not hasattr(ok.data, "role")

    bad = validate_model(UserCreate, {"username": "   "})
    assert bad.success is False
    assert _paths(bad) == {"username", "password"}
