from unittest.mock import AsyncMock, patch

from resume_builder.app.llm.orchestration import GenerationError
from resume_builder.app.schemas.llm import AnalyzeResumeRequest, GenerateResumeRequest

GENERATE_PATH = "resume_builder.app.api.routes.resume_ai.generate_resume_content"
ANALYZE_PATH = "resume_builder.app.api.routes.resume_ai.analyze_resume_for_ats"


@patch(GENERATE_PATH, new_callable=AsyncMock)
def test_generate_resume(mock_generate, auth_client, settings, resume_content):
    """Generated content that matches the resume shape is returned as is."""
    mock_generate.return_value = resume_content

    response = auth_client.post(
        "/api/generate-resume",
        json={"careerLevel": "Senior", "industry": "Finance", "jobDescription": "Data role"},
    )

    assert response.status_code == 200, response.text
    assert response.json() == resume_content
    request, passed_settings = mock_generate.await_args.args
    assert request == GenerateResumeRequest(
        career_level="Senior",
        industry="Finance",
        job_description="Data role",
    )
    assert passed_settings == settings


@patch(GENERATE_PATH, new_callable=AsyncMock)
def test_generate_resume_drops_extra_fields(mock_generate, auth_client, resume_content):
    mock_generate.return_value = {**resume_content, "references": "On request"}

    response = auth_client.post(
        "/api/generate-resume",
        json={"careerLevel": "Mid", "industry": "Software"},
    )

    assert response.status_code == 200
    assert "references" not in response.json()


@patch(GENERATE_PATH, new_callable=AsyncMock)
def test_generate_resume_wrong_shape_is_500(mock_generate, auth_client):
    """A reply that does not match the resume shape is not passed through."""
    mock_generate.return_value = {"resume": "Here you go"}

    response = auth_client.post(
        "/api/generate-resume",
        json={"careerLevel": "Mid", "industry": "Software"},
    )

    assert response.status_code == 500
    body = response.json()
    assert body["message"].startswith("Failed to generate resume: ")
    assert {e["path"] for e in body["errors"]} == {
        "personalInfo",
        "summary",
        "experience",
        "education",
        "skills",
    }


@patch(GENERATE_PATH, new_callable=AsyncMock)
def test_generate_resume_service_failure_is_500(mock_generate, auth_client):
    mock_generate.side_effect = GenerationError("Failed to generate resume: timeout")

    response = auth_client.post(
        "/api/generate-resume",
        json={"careerLevel": "Mid", "industry": "Software"},
    )

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to generate resume: timeout"}


@patch(GENERATE_PATH, new_callable=AsyncMock)
def test_generate_resume_requires_authentication(mock_generate, client):
    response = client.post(
        "/api/generate-resume",
        json={"careerLevel": "Mid", "industry": "Software"},
    )

    assert response.status_code == 401
    mock_generate.assert_not_called()


@patch(ANALYZE_PATH, new_callable=AsyncMock)
def test_analyze_resume(mock_analyze, auth_client, resume_content):
    analysis = {"score": 64, "missingKeywords": ["Airflow"], "suggestions": ["Quantify impact"]}
    mock_analyze.return_value = analysis

    response = auth_client.post(
        "/api/analyze-resume",
        json={"resume": resume_content, "jobDescription": "Airflow pipelines"},
    )

    assert response.status_code == 200
    assert response.json() == analysis
    request = mock_analyze.await_args.args[0]
    assert request == AnalyzeResumeRequest(
        resume=resume_content,
        job_description="Airflow pipelines",
    )


@patch(ANALYZE_PATH, new_callable=AsyncMock)
def test_analyze_resume_failure_is_500(mock_analyze, auth_client):
    mock_analyze.side_effect = GenerationError("Failed to analyze resume: bad key")

    response = auth_client.post(
        "/api/analyze-resume",
        json={"resume": "text", "jobDescription": "jd"},
    )

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to analyze resume: bad key"}


@patch(ANALYZE_PATH, new_callable=AsyncMock)
def test_analyze_resume_requires_authentication(mock_analyze, client):
    response = client.post(
        "/api/analyze-resume",
        json={"resume": "text", "jobDescription": "jd"},
    )

    assert response.status_code == 401
    mock_analyze.assert_not_called()
