"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Documents are stored in MongoDB with the same snake_case field names;
only assessment scores are returned in camelCase (problemSolving).
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List, Any, Dict
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class Degree(str, Enum):
    high_school = "High School"
    diploma = "Diploma"
    bachelor = "Bachelor"
    btech = "BTech"
    be = "BE"
    bsc = "BSc"
    bca = "BCA"
    bba = "BBA"
    bcom = "BCom"
    master = "Master"
    mtech = "MTech"
    msc = "MSc"
    mba = "MBA"
    mca = "MCA"
    phd = "PhD"
    other = "Other"


class RequiredEducation(str, Enum):
    any = "Any"
    high_school = "High School"
    diploma = "Diploma"
    bachelor = "Bachelor"
    master = "Master"
    phd = "PhD"


class SkillLevel(str, Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"
    expert = "Expert"


class JobType(str, Enum):
    full_time = "Full-time"
    part_time = "Part-time"
    contract = "Contract"
    internship = "Internship"
    freelance = "Freelance"


class LocationType(str, Enum):
    remote = "Remote"
    on_site = "On-site"
    hybrid = "Hybrid"


class SalaryPeriod(str, Enum):
    hourly = "Hourly"
    monthly = "Monthly"
    yearly = "Yearly"


class ApplicationStatus(str, Enum):
    applied = "applied"
    reviewed = "reviewed"
    shortlisted = "shortlisted"
    rejected = "rejected"
    hired = "hired"


class CollegeCategory(str, Enum):
    engineering = "Engineering"
    medical = "Medical"
    management = "Management"
    arts_science = "Arts & Science"
    law = "Law"
    other = "Other"


class VoiceFormType(str, Enum):
    student_assessment = "student_assessment"
    job_posting = "job_posting"


# ============================================================
# ASSESSMENT SCHEMAS
# ============================================================

class SliderValues(BaseModel):
    independence: int = Field(50, ge=0, le=100)
    routine: int = Field(50, ge=0, le=100)
    pace: int = Field(50, ge=0, le=100)
    focus: int = Field(50, ge=0, le=100)
    approach: int = Field(50, ge=0, le=100)


class BubbleAnswers(BaseModel):
    q1: Optional[int] = Field(None, ge=1, le=5)
    q2: Optional[int] = Field(None, ge=1, le=5)
    q3: Optional[int] = Field(None, ge=1, le=5)
    q4: Optional[int] = Field(None, ge=1, le=5)
    q5: Optional[int] = Field(None, ge=1, le=5)
    q6: Optional[int] = Field(None, ge=1, le=5)
    q7: Optional[int] = Field(None, ge=1, le=5)
    q8: Optional[int] = Field(None, ge=1, le=5)
    q9: Optional[int] = Field(None, ge=1, le=5)
    q10: Optional[int] = Field(None, ge=1, le=5)


class AssessmentAnswers(BaseModel):
    """Raw answers of the multi-step assessment form."""
    model_config = ConfigDict(populate_by_name=True)

    education: Optional[str] = None
    core_values: List[str] = Field(default_factory=list, alias="coreValues")
    sliders: SliderValues = Field(default_factory=SliderValues)
    bubbles: BubbleAnswers = Field(default_factory=BubbleAnswers)


class AssessmentScore(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    technical: int = Field(0, ge=0, le=100)
    communication: int = Field(0, ge=0, le=100)
    problem_solving: int = Field(0, ge=0, le=100, alias="problemSolving")
    teamwork: int = Field(0, ge=0, le=100)


class SliderOption(BaseModel):
    name: str
    min: int
    max: int
    default: int


class BubbleOptions(BaseModel):
    keys: List[str]
    min: int
    max: int


class AssessmentOptionsResponse(BaseModel):
    education_levels: List[str]
    core_values: List[str]
    required_core_values: int
    sliders: List[SliderOption]
    bubbles: BubbleOptions


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentEducation(BaseModel):
    degree: Degree
    field: str = Field(..., min_length=1)
    institution: str = Field(..., min_length=1)
    graduation_year: int = Field(..., ge=1950, le=2100)


class StudentSkill(BaseModel):
    name: str = Field(..., min_length=1)
    level: SkillLevel = SkillLevel.intermediate


class Internship(BaseModel):
    company: Optional[str] = None
    role: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None


class Project(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = []
    link: Optional[str] = None


class StudentExperience(BaseModel):
    years: float = Field(0, ge=0, le=50)
    internships: List[Internship] = []
    projects: List[Project] = []


class SalaryExpectation(BaseModel):
    min: float = Field(0, ge=0)
    max: float = Field(0, ge=0)
    currency: str = "INR"


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    phone: str = Field(..., min_length=10, max_length=15)
    email: EmailStr
    education: StudentEducation
    skills: List[StudentSkill] = []
    experience: StudentExperience = Field(default_factory=StudentExperience)
    interests: List[str] = []
    career_goals: str = Field(..., min_length=1)
    preferred_location: List[str] = []
    salary_expectation: SalaryExpectation = Field(default_factory=SalaryExpectation)
    # Answers take precedence over a pre-computed score
    assessment: Optional[AssessmentAnswers] = None
    assessment_score: Optional[AssessmentScore] = None

    @field_validator("phone")
    @classmethod
    def phone_digits(cls, v: str) -> str:
        cleaned = v.strip().replace(" ", "").replace("-", "")
        if not cleaned.lstrip("+").isdigit():
            raise ValueError("Phone number must contain only digits")
        return cleaned


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    education: Optional[StudentEducation] = None
    skills: Optional[List[StudentSkill]] = None
    experience: Optional[StudentExperience] = None
    interests: Optional[List[str]] = None
    career_goals: Optional[str] = Field(None, min_length=1)
    preferred_location: Optional[List[str]] = None
    salary_expectation: Optional[SalaryExpectation] = None
    assessment: Optional[AssessmentAnswers] = None
    assessment_score: Optional[AssessmentScore] = None


class StudentResponse(BaseModel):
    id: str
    name: str
    phone: str
    email: str
    education: Optional[Dict[str, Any]] = None
    skills: List[Dict[str, Any]] = []
    experience: Optional[Dict[str, Any]] = None
    interests: List[str] = []
    career_goals: Optional[str] = None
    preferred_location: List[str] = []
    salary_expectation: Optional[Dict[str, Any]] = None
    assessment_score: AssessmentScore = Field(default_factory=AssessmentScore)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class CompanyInfo(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    logo: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None


class ExperienceRange(BaseModel):
    min: float = Field(0, ge=0)
    max: Optional[float] = Field(None, ge=0)


class JobRequirements(BaseModel):
    education: RequiredEducation = RequiredEducation.any
    experience: ExperienceRange = Field(default_factory=ExperienceRange)
    skills: List[str] = []
    certifications: List[str] = []


class JobLocation(BaseModel):
    type: LocationType = LocationType.on_site
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    address: Optional[str] = None


class Salary(BaseModel):
    min: Optional[float] = Field(None, ge=0)
    max: Optional[float] = Field(None, ge=0)
    currency: str = "INR"
    period: SalaryPeriod = SalaryPeriod.yearly


class JobCreate(BaseModel):
    title: str = Field(..., min_length=2, max_length=200)
    company: CompanyInfo
    description: str = Field(..., min_length=1)
    requirements: JobRequirements = Field(default_factory=JobRequirements)
    responsibilities: List[str] = []
    benefits: List[str] = []
    location: JobLocation = Field(default_factory=JobLocation)
    salary: Optional[Salary] = None
    job_type: JobType
    industry: str = Field(..., min_length=1)
    department: Optional[str] = None
    application_deadline: Optional[datetime] = None


class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=2, max_length=200)
    company: Optional[CompanyInfo] = None
    description: Optional[str] = None
    requirements: Optional[JobRequirements] = None
    responsibilities: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    location: Optional[JobLocation] = None
    salary: Optional[Salary] = None
    job_type: Optional[JobType] = None
    industry: Optional[str] = None
    department: Optional[str] = None
    application_deadline: Optional[datetime] = None


class JobResponse(BaseModel):
    id: str
    job_id: str
    title: str
    company: Dict[str, Any]
    description: Optional[str] = None
    requirements: Optional[Dict[str, Any]] = None
    responsibilities: List[str] = []
    benefits: List[str] = []
    location: Optional[Dict[str, Any]] = None
    salary: Optional[Dict[str, Any]] = None
    job_type: Optional[str] = None
    industry: Optional[str] = None
    department: Optional[str] = None
    application_deadline: Optional[datetime] = None
    is_active: bool = True
    application_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobListResponse(BaseModel):
    jobs: List[JobResponse]
    total: int
    page: int
    limit: int
    total_pages: int


# ============================================================
# FITMENT SCHEMAS
# ============================================================

class FitmentResult(BaseModel):
    score: int
    total_score: Optional[int] = None
    max_score: Optional[int] = None
    reasons: List[str] = []
    strengths: List[str] = []
    improvements: List[str] = []
    match_level: str
    ai_generated: bool = False


class MatchedJob(BaseModel):
    job: JobResponse
    fitment: FitmentResult


class StudentRef(BaseModel):
    name: str
    phone: str
    email: Optional[str] = None


class MatchedJobsResponse(BaseModel):
    student: StudentRef
    matched_jobs: List[MatchedJob]
    total_jobs: int
    average_score: int


class FitmentDetailResponse(BaseModel):
    student: StudentRef
    job_id: str
    job_title: str
    company_name: str
    fitment: FitmentResult


class CandidateFitment(BaseModel):
    student_id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    education: Optional[Dict[str, Any]] = None
    fitment_score: int
    strengths: List[str] = []
    improvements: List[str] = []
    assessment_score: Optional[AssessmentScore] = None


class JobAnalytics(BaseModel):
    total_candidates: int
    excellent_matches: int
    good_matches: int
    fair_matches: int
    average_score: int
    top_candidates: List[CandidateFitment]
    candidates: List[CandidateFitment] = []


class JobAnalyticsResponse(BaseModel):
    job_id: str
    title: str
    company_name: str
    analytics: JobAnalytics


# ============================================================
# COLLEGE SCHEMAS
# ============================================================

class CollegeLocation(BaseModel):
    city: str = ""
    state: str = ""
    country: str = "India"


class CollegeCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    category: Optional[CollegeCategory] = None
    location: Optional[CollegeLocation] = None
    added_by: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("College name must be at least 2 characters")
        return v


class CollegeBulkAdd(BaseModel):
    colleges: List[str] = Field(..., min_length=1)


class CollegeResponse(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    location: Optional[Dict[str, Any]] = None
    usage_count: int = 0
    is_verified: bool = False


class CollegeListResponse(BaseModel):
    colleges: List[CollegeResponse]
    count: int


class CollegeAddResponse(BaseModel):
    message: str
    college: CollegeResponse
    is_new: bool


class BulkAddError(BaseModel):
    college: str
    error: str


class CollegeBulkAddResponse(BaseModel):
    message: str
    added: int
    updated: int
    errors: List[BulkAddError] = []


class NamedCount(BaseModel):
    name: Optional[str] = None
    count: int


class CollegeStatsResponse(BaseModel):
    total: int
    verified: int
    user_added: int
    popular: int
    categories: List[NamedCount]
    top_states: List[NamedCount]


# ============================================================
# APPLICATION / SAVED JOB SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    student_phone: str = Field(..., min_length=1)
    job_id: str = Field(..., min_length=1)
    fitment_score: Optional[float] = Field(None, ge=0, le=100)


class ApplicationResponse(BaseModel):
    id: str
    student_phone: str
    student_name: str
    student_email: Optional[str] = None
    job_id: str
    job_title: str
    company_name: str
    fitment_score: Optional[float] = None
    status: ApplicationStatus = ApplicationStatus.applied
    student_details: Optional[Dict[str, Any]] = None
    applied_at: datetime


class JobApplicationsGroup(BaseModel):
    job_id: str
    job_title: str
    applications: List[ApplicationResponse]


class CompanyApplicationsResponse(BaseModel):
    company_name: str
    total_applications: int
    applications_by_job: List[JobApplicationsGroup]
    all_applications: List[ApplicationResponse]


class SaveJobRequest(BaseModel):
    student_phone: str = Field(..., min_length=1)
    job_id: str = Field(..., min_length=1)


class SavedJobResponse(BaseModel):
    id: str
    student_phone: str
    job_id: str
    job_title: str
    company_name: str
    job_details: Optional[Dict[str, Any]] = None
    saved_at: datetime


class SavedJobListResponse(BaseModel):
    saved_jobs: List[SavedJobResponse]
    count: int


# ============================================================
# AUTH / ADMIN SCHEMAS
# ============================================================

class AdminLoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class JobStats(BaseModel):
    total_jobs: int = 0
    active_jobs: int = 0
    inactive_jobs: int = 0
    total_applications: int = 0


class AdminJobListResponse(BaseModel):
    jobs: List[JobResponse]
    total: int
    page: int
    limit: int
    total_pages: int
    stats: JobStats


class JobStatusUpdate(BaseModel):
    is_active: bool


class StudentSummaryResponse(BaseModel):
    student: StudentRef
    summary: str
    generated_at: datetime


# ============================================================
# VOICE SCHEMAS
# ============================================================

class TranscriptionResponse(BaseModel):
    transcript: str
    language: Optional[str] = None
    duration: Optional[float] = None
    segments: List[Any] = []


class ExtractFieldsRequest(BaseModel):
    transcript: str = Field(..., min_length=1)
    form_type: VoiceFormType = VoiceFormType.student_assessment


class ExtractFieldsResponse(BaseModel):
    transcript: str
    form_type: VoiceFormType
    extracted_fields: Dict[str, Any]


class VoiceProcessResponse(BaseModel):
    message: str
    transcript: str
    extracted_fields: Dict[str, Any]


# ============================================================
# RECOMMENDATION SCHEMAS
# ============================================================

class RecommendationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(..., min_length=1, alias="fullName")
    core_values: List[str] = Field(..., min_length=1, alias="coreValues")
    work_preferences: Dict[str, Any] = Field(..., alias="workPreferences")
    behavioral_answers: Dict[str, Any] = Field(..., alias="behavioralAnswers")


class RecommendationResponse(BaseModel):
    message: str
    recommendations: List[Dict[str, Any]]
    total_recommendations: int
    generated_at: datetime


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
