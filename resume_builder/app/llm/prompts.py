RESUME_GENERATION_SYSTEM_PROMPT = """You are an expert resume writer. You write concise, truthful, achievement-oriented resumes and always answer with a single JSON object and nothing else."""

RESUME_GENERATION_HUMAN_PROMPT = """Create a professional resume based on the following criteria:
Career Level: {career_level}
Industry: {industry}
{job_description_block}{current_resume_block}
Please provide a JSON response that matches this schema:
{response_schema}
"""

RESUME_CONTENT_JSON_SCHEMA = """{
  "personalInfo": {
    "fullName": "string",
    "email": "string",
    "phone": "string",
    "location": "string"
  },
  "summary": "string",
  "experience": [{
    "title": "string",
    "company": "string",
    "location": "string",
    "startDate": "string",
    "endDate": "string",
    "description": "string"
  }],
  "education": [{
    "degree": "string",
    "school": "string",
    "location": "string",
    "graduationDate": "string"
  }],
  "skills": ["string"]
}"""

ATS_ANALYSIS_SYSTEM_PROMPT = """You are an Applicant Tracking System (ATS) specialist. You compare resumes against job descriptions and always answer with a single JSON object and nothing else."""

ATS_ANALYSIS_HUMAN_PROMPT = """Analyze this resume against the job description for ATS optimization.
Resume: {resume}
Job Description: {job_description}

Provide a JSON response with:
{response_schema}
"""

ATS_ANALYSIS_JSON_SCHEMA = """{
  "score": number (0-100),
  "missingKeywords": [string],
  "suggestions": [string]
}"""
