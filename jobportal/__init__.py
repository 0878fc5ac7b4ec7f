"""
Kaizen Job Portal
Assessment-driven job portal backend.

Architecture:
- MongoDB: Students, job postings, colleges, saved jobs, applications
- Scoring engine: Rule-based assessment scores (technical, communication,
  problem solving, teamwork) used for job fitment
- OpenAI: Voice transcription, form extraction, optional AI fitment and
  career recommendations (never required for the core flow)
"""

__version__ = "1.0.0"
