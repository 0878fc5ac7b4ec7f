"""
Career Recommendation Service

Turns a finished assessment (core values, work preferences, behavioral
answers) into 3-6 internship role suggestions. The model may only pick from
CAREER_ROLES; each suggestion is then enriched with the number of open
postings that carry the same title.
"""

import json
from datetime import datetime
from typing import List, Optional

from pymongo.errors import PyMongoError

from jobportal.core.logging import get_logger
from jobportal.services.ai_client import AIServiceError, OpenAIClient, get_ai_client
from jobportal.services.mongo_service import JobService

logger = get_logger(__name__)


CAREER_ROLES = (
    "Agile Coach",
    "AI Engineer",
    "AI Research Scientist",
    "AI Solutions Architect",
    "Application Developer",
    "Assembly Line Worker",
    "Automation Tester",
    "Back-End Developer",
    "Bank Teller",
    "Big Data Engineer",
    "Business Analyst",
    "Change Management Specialist",
    "Clinical Research Associate",
    "Cloud Administrator",
    "Cloud Developer",
    "Cloud Security Engineer",
    "Cloud Solutions Architect",
    "CNC Machinist",
    "Compliance Analyst",
    "Compliance Engineer",
    "Computer Vision Engineer",
    "Conversational AI Designer",
    "Corporate Loan Analyst",
    "Credit Officer",
    "Cybersecurity Analyst",
    "Cybersecurity Consultant",
    "Data Analyst",
    "Data Engineer",
    "Data Scientist",
    "Data Warehouse Developer",
    "Database Administrator",
    "Database Engineer",
    "Deep Learning Engineer",
    "Desktop Application Developer",
    "DevOps Engineer",
    "Digital Marketing Specialist",
    "Digital Transformation Lead",
    "Documentation Specialist",
    "Electronics Design Engineer",
    "Electronics QA Inspector",
    "Embedded Software Engineer",
    "Enterprise Architect",
    "Ethical Hacker",
    "Front-End Developer",
    "Front-End Web Engineer",
    "Full-Stack Developer",
    "Game Developer",
    "Health & Safety Officer",
    "Healthcare Administrator",
    "Incident Responder",
    "Interaction Designer",
    "Inventory Control Manager",
    "IT Account Manager",
    "IT Auditor",
    "IT Consultant",
    "IT Manager",
    "IT Operations Engineer",
    "IT Risk Analyst",
    "IT Strategy Consultant",
    "IT Support Specialist",
    "Logistics Coordinator",
    "Machine Learning Engineer",
    "Maintenance Technician",
    "Market Access Specialist",
    "Medical Records Technician",
    "Medical Sales Representative",
    "Medical Technologist",
    "Mobile App Developer",
    "Network Administrator",
    "Network Engineer",
    "NLP Engineer",
    "Patient Care Coordinator",
    "Penetration Tester",
    "Performance Tester",
    "Pharmacovigilance Specialist",
    "Physician Assistant",
    "Physiotherapist",
    "Pre-Sales Consultant",
    "Process Consultant",
    "Process Engineer",
    "Procurement Specialist",
    "Product Manager",
    "Production Operator",
    "Production Planner",
    "Production Supervisor",
    "Project Manager",
    "Prototyping Specialist",
    "QA Analyst",
    "QA Engineer",
    "Quality Control Analyst",
    "Quality Inspector",
    "Quantitative Analyst",
    "Radiology Technician",
    "Regulatory Affairs Specialist",
    "Relationship Manager",
    "Reliability Engineer",
    "Research Scientist",
    "Scrum Master",
    "Security Architect",
    "Security Engineer",
    "Site Reliability Engineer",
    "Software Architect",
    "Software Tester",
    "Solutions Consultant",
    "Speech-Language Pathologist",
    "SQL Developer",
    "Staff Nurse",
    "Supply Chain Specialist",
    "System Administrator",
    "Systems Analyst",
    "Technical Product Manager",
    "Technical Sales Engineer",
    "Technical Writer",
    "Technology Analyst",
    "Test Automation Engineer",
    "UI Developer",
    "UI/UX Researcher",
    "UX Designer",
    "UX Engineer",
    "Vulnerability Analyst",
    "Web Developer",
)

SYSTEM_PROMPT = """You are an expert career counselor and job matching specialist. Analyze a candidate's
assessment data and provide a list of career matches.

This is the only list of job roles you are allowed to recommend. Map any other role you think of
to the closest role on this list:
{roles}

Task:
1. Analyze the candidate's core values, work preferences and behavioral traits.
2. Select 3-6 of the most suitable internship roles from the list.
3. For each role give a jobTitle, a one-line jobDescription for an internship position, a Unicode
   emoji as relevantLogo and three short bullet points in whyYouMatch explaining the fit.
4. Give a fitmentScore from 0 to 100.

Respond ONLY with a JSON object:
{{"matches": [{{"jobTitle": "string", "fitmentScore": 0, "jobDescription": "string",
"relevantLogo": "string", "whyYouMatch": ["string", "string", "string"]}}]}}"""


def build_system_prompt() -> str:
    return SYSTEM_PROMPT.format(roles=json.dumps(list(CAREER_ROLES), indent=0))


def build_candidate_summary(
    full_name: str,
    core_values: List[str],
    work_preferences: dict,
    behavioral_answers: dict
) -> str:
    return (
        "Candidate Assessment Data:\n"
        f"Full Name: {full_name}\n"
        f"Core Values: {json.dumps(core_values)}\n"
        f"Work Preferences: {json.dumps(work_preferences)}\n"
        f"Behavioral Answers: {json.dumps(behavioral_answers)}\n\n"
        "Please analyze this candidate's profile and provide job recommendations."
    )


class RecommendationService:
    """
    Generates career matches.

    Process:
    1. Ask the model for matches restricted to CAREER_ROLES
    2. Look up active job counts per title
    3. Attach availableJobs to every match
    """

    def __init__(
        self,
        job_service: Optional[JobService] = None,
        ai_client: Optional[OpenAIClient] = None
    ):
        self.job_service = job_service or JobService()
        self.ai_client = ai_client or get_ai_client()

    def _job_availability(self) -> dict:
        try:
            return self.job_service.active_counts_by_title()
        except PyMongoError as e:
            # Recommendations still work without availability numbers
            logger.warning(f"Could not load job availability: {e}")
            return {}

    def generate(
        self,
        full_name: str,
        core_values: List[str],
        work_preferences: dict,
        behavioral_answers: dict
    ) -> dict:
        data = self.ai_client.career_matches(
            build_system_prompt(),
            build_candidate_summary(full_name, core_values, work_preferences, behavioral_answers)
        )
        matches = data.get("matches")
        if not isinstance(matches, list):
            raise AIServiceError("The AI response had no list of matches")

        availability = self._job_availability()
        recommendations = [
            {**match, "availableJobs": availability.get(match.get("jobTitle"), 0)}
            for match in matches
            if isinstance(match, dict)
        ]

        logger.info(f"Generated {len(recommendations)} career matches for {full_name}")
        return {
            "message": "Job recommendations generated successfully",
            "recommendations": recommendations,
            "total_recommendations": len(recommendations),
            "generated_at": datetime.utcnow().isoformat()
        }


def get_recommendation_service() -> RecommendationService:
    return RecommendationService()
