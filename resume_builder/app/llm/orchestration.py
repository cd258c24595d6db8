import json
import logging
from typing import Any

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

from resume_builder.app.core.config import Settings
from resume_builder.app.llm.prompts import (
    ATS_ANALYSIS_HUMAN_PROMPT,
    ATS_ANALYSIS_JSON_SCHEMA,
    ATS_ANALYSIS_SYSTEM_PROMPT,
    RESUME_CONTENT_JSON_SCHEMA,
    RESUME_GENERATION_HUMAN_PROMPT,
    RESUME_GENERATION_SYSTEM_PROMPT,
)
from resume_builder.app.schemas.llm import AnalyzeResumeRequest, GenerateResumeRequest

log = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gpt-4o"


class GenerationError(Exception):
    """Raised when the text-generation service fails or returns unusable output."""


def _get_llm(settings: Settings) -> ChatOpenAI:
    """Build the chat model client from settings.

    Args:
        settings (Settings): Application settings holding the model name, endpoint, and API key.

    Returns:
        ChatOpenAI: An initialized chat model client.

    Notes:
        1. Use `settings.llm_model_name`, falling back to the default model when empty.
        2. If a custom endpoint is configured, pass it as `openai_api_base`.
        3. If an API key is configured, pass it; otherwise the client reads OPENAI_API_KEY itself.

    """
    llm_params: dict[str, Any] = {
        "model": settings.llm_model_name or DEFAULT_MODEL_NAME,
        "temperature": 0.7,
    }
    if settings.llm_endpoint:
        llm_params["openai_api_base"] = settings.llm_endpoint
    if settings.openai_api_key:
        llm_params["api_key"] = settings.openai_api_key

    return ChatOpenAI(**llm_params)


async def _invoke_for_json(
    system_prompt: str,
    human_prompt: str,
    variables: dict[str, str],
    settings: Settings,
) -> dict[str, Any]:
    """Run a prompt against the chat model in JSON mode and decode the reply.

    Args:
        system_prompt (str): The system message template.
        human_prompt (str): The human message template.
        variables (dict[str, str]): Values for the template placeholders.
        settings (Settings): Application settings used to build the client.

    Returns:
        dict[str, Any]: The decoded JSON object.

    Raises:
        ValueError: If the reply is not valid JSON or not a JSON object.

    Network access:
        - This function makes a network request to the configured LLM endpoint.

    """
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", system_prompt),
            ("human", human_prompt),
        ],
    )
    llm = _get_llm(settings).bind(response_format={"type": "json_object"})
    chain = prompt | llm | StrOutputParser()

    response_str = await chain.ainvoke(variables)

    parsed = json.loads(response_str)
    if not isinstance(parsed, dict):
        raise ValueError("The AI service did not return a JSON object")
    return parsed


async def generate_resume_content(
    request: GenerateResumeRequest,
    settings: Settings,
) -> dict[str, Any]:
    """Ask the chat model to write resume content.

    Args:
        request (GenerateResumeRequest): Career level, industry, and optional job
            description and current resume.
        settings (Settings): Application settings used to build the client.

    Returns:
        dict[str, Any]: The decoded reply, expected to follow the ResumeContent shape.
            The shape is not checked here.

    Raises:
        GenerationError: If the call fails or the reply is not a JSON object.

    Notes:
        1. Include the job description and current resume lines only when provided.
        2. Embed the expected JSON layout in the prompt and request JSON mode.
        3. Wrap every failure in `GenerationError` carrying the underlying message.

    Network access:
        - This function makes a network request to the configured LLM endpoint.

    """
    _msg = "generate_resume_content starting"
    log.debug(_msg)

    job_description_block = (
        f"Job Description: {request.job_description}\n"
        if request.job_description
        else ""
    )
    current_resume_block = (
        f"Current Resume: {request.current_resume}\n" if request.current_resume else ""
    )

    try:
        content = await _invoke_for_json(
            system_prompt=RESUME_GENERATION_SYSTEM_PROMPT,
            human_prompt=RESUME_GENERATION_HUMAN_PROMPT,
            variables={
                "career_level": request.career_level,
                "industry": request.industry,
                "job_description_block": job_description_block,
                "current_resume_block": current_resume_block,
                "response_schema": RESUME_CONTENT_JSON_SCHEMA,
            },
            settings=settings,
        )
    except Exception as e:
        _msg = f"Failed to generate resume: {e!s}"
        log.exception(_msg)
        raise GenerationError(_msg) from e

    _msg = "generate_resume_content returning"
    log.debug(_msg)
    return content


async def analyze_resume_for_ats(
    request: AnalyzeResumeRequest,
    settings: Settings,
) -> dict[str, Any]:
    """Ask the chat model to score a resume against a job description.

    Args:
        request (AnalyzeResumeRequest): The resume (text or structured) and the job description.
        settings (Settings): Application settings used to build the client.

    Returns:
        dict[str, Any]: The decoded reply, expected to hold `score` (0-100),
            `missingKeywords`, and `suggestions`.

    Raises:
        GenerationError: If the call fails or the reply is not a JSON object.

    Network access:
        - This function makes a network request to the configured LLM endpoint.

    """
    _msg = "analyze_resume_for_ats starting"
    log.debug(_msg)

    resume_text = (
        request.resume if isinstance(request.resume, str) else json.dumps(request.resume)
    )

    try:
        analysis = await _invoke_for_json(
            system_prompt=ATS_ANALYSIS_SYSTEM_PROMPT,
            human_prompt=ATS_ANALYSIS_HUMAN_PROMPT,
            variables={
                "resume": resume_text,
                "job_description": request.job_description,
                "response_schema": ATS_ANALYSIS_JSON_SCHEMA,
            },
            settings=settings,
        )
    except Exception as e:
        _msg = f"Failed to analyze resume: {e!s}"
        log.exception(_msg)
        raise GenerationError(_msg) from e

    _msg = "analyze_resume_for_ats returning"
    log.debug(_msg)
    return analysis
