import pytest


SAMPLE_RESUME = """Jane Doe
jane@example.com
SUMMARY
Software engineer with 5 years building web services.
EXPERIENCE
Acme Corp
- Built internal dashboards
* Reduced page load time by 40%
EDUCATION
BS Computer Science
SKILLS
Technical Skills: Python, SQL
Soft Skills: Teamwork
PROJECTS
• Chat application
"""

SAMPLE_JOB = """Senior Python developer. Experience with Docker, Kubernetes and AWS.
Strong communication and leadership skills, machine learning a plus."""


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def sample_job():
    return SAMPLE_JOB
