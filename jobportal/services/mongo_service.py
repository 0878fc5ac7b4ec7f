"""
MongoDB Service - CRUD operations for portal collections.

Collections in this database:
1. students          - Student profiles with assessment answers and scores
2. jobs              - Job postings managed by admins/companies
3. colleges          - College directory behind the autocomplete widget
4. saved_jobs        - Jobs bookmarked by students
5. job_applications  - Applications with a snapshot of the student profile

Students are identified by phone number; jobs by their generated job_id
(falling back to the Mongo ObjectId for older links).
"""

import re
import uuid
from datetime import datetime
from typing import Optional, List, Dict, Any, Tuple
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from jobportal.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict (``_id`` becomes ``id``)."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def _object_id(value: str) -> Optional[ObjectId]:
    return ObjectId(value) if ObjectId.is_valid(value) else None


def _contains(term: str) -> dict:
    """Case-insensitive 'contains' regex for user-supplied text."""
    return {"$regex": re.escape(term.strip()), "$options": "i"}


def generate_job_id() -> str:
    return f"JOB_{uuid.uuid4().hex[:8].upper()}"


# ============================================================
# STUDENTS COLLECTION
# ============================================================

class StudentService:
    """
    Handles student profiles.
    One document per phone number (unique index).
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["students"])

    def create(self, student: dict) -> Optional[dict]:
        """
        Insert a student profile.

        Returns:
            The stored document, or None if the phone number is already registered
        """
        now = datetime.utcnow()
        doc = {**student, "created_at": now, "updated_at": now}
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            return None
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get_by_phone(self, phone: str) -> Optional[dict]:
        doc = self.collection.find_one({"phone": phone})
        return serialize_doc(doc)

    def update_by_phone(self, phone: str, updates: dict) -> Optional[dict]:
        """Apply a partial update. Returns the updated document or None."""
        updates = {k: v for k, v in updates.items() if k not in ("phone", "_id", "id")}
        updates["updated_at"] = datetime.utcnow()
        doc = self.collection.find_one_and_update(
            {"phone": phone},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def delete_by_phone(self, phone: str) -> Optional[dict]:
        doc = self.collection.find_one_and_delete({"phone": phone})
        return serialize_doc(doc)

    def list_all(self) -> List[dict]:
        return serialize_docs(self.collection.find({}))


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobService:
    """
    Handles job postings.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["jobs"])

    def _lookup(self, job_id: str) -> Optional[dict]:
        # Try the public job_id first, then the Mongo _id
        doc = self.collection.find_one({"job_id": job_id})
        if doc is None:
            oid = _object_id(job_id)
            if oid is not None:
                doc = self.collection.find_one({"_id": oid})
        return doc

    def create(self, job: dict) -> dict:
        now = datetime.utcnow()
        doc = {
            **job,
            "job_id": generate_job_id(),
            "is_active": True,
            "application_count": 0,
            "created_at": now,
            "updated_at": now
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get(self, job_id: str) -> Optional[dict]:
        return serialize_doc(self._lookup(job_id))

    def list_active(
        self,
        page: int = 1,
        limit: int = 10,
        industry: Optional[str] = None,
        job_type: Optional[str] = None,
        location_type: Optional[str] = None
    ) -> Tuple[List[dict], int]:
        """
        List active jobs, newest first.

        Returns:
            (jobs on the requested page, total matching jobs)
        """
        query: Dict[str, Any] = {"is_active": True}
        if industry:
            query["industry"] = industry
        if job_type:
            query["job_type"] = job_type
        if location_type:
            query["location.type"] = location_type

        total = self.collection.count_documents(query)
        cursor = (
            self.collection.find(query)
            .sort("created_at", -1)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        return serialize_docs(cursor), total

    def list_all_active(self) -> List[dict]:
        """Every job that has not been explicitly deactivated (used for matching)."""
        return serialize_docs(self.collection.find({"is_active": {"$ne": False}}))

    def update(self, job_id: str, updates: dict) -> Optional[dict]:
        doc = self._lookup(job_id)
        if doc is None:
            return None
        updates = {k: v for k, v in updates.items() if k not in ("job_id", "_id", "id")}
        updates["updated_at"] = datetime.utcnow()
        updated = self.collection.find_one_and_update(
            {"_id": doc["_id"]},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(updated)

    def set_active(self, job_id: str, is_active: bool) -> Optional[dict]:
        return self.update(job_id, {"is_active": is_active})

    def delete(self, job_id: str) -> Optional[dict]:
        doc = self._lookup(job_id)
        if doc is None:
            return None
        self.collection.delete_one({"_id": doc["_id"]})
        return serialize_doc(doc)

    def increment_application_count(self, job_id: str) -> bool:
        result = self.collection.update_one(
            {"job_id": job_id},
            {"$inc": {"application_count": 1}}
        )
        return result.modified_count > 0

    def admin_list(
        self,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
        status: Optional[str] = None,
        industry: Optional[str] = None,
        job_type: Optional[str] = None
    ) -> Tuple[List[dict], int, dict]:
        """
        List all jobs (active and inactive) for the admin dashboard.

        Returns:
            (jobs on the page, total matching jobs, summary stats over all jobs)
        """
        query: Dict[str, Any] = {}
        if search:
            query["$or"] = [
                {"title": _contains(search)},
                {"company.name": _contains(search)},
                {"job_id": _contains(search)}
            ]
        if status == "active":
            query["is_active"] = True
        elif status == "inactive":
            query["is_active"] = False
        if industry:
            query["industry"] = industry
        if job_type:
            query["job_type"] = job_type

        total = self.collection.count_documents(query)
        cursor = (
            self.collection.find(query)
            .sort("created_at", -1)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        jobs = serialize_docs(cursor)

        stats = list(self.collection.aggregate([
            {
                "$group": {
                    "_id": None,
                    "total_jobs": {"$sum": 1},
                    "active_jobs": {"$sum": {"$cond": ["$is_active", 1, 0]}},
                    "inactive_jobs": {"$sum": {"$cond": ["$is_active", 0, 1]}},
                    "total_applications": {"$sum": "$application_count"}
                }
            }
        ]))
        if stats:
            summary = {k: v for k, v in stats[0].items() if k != "_id"}
        else:
            summary = {"total_jobs": 0, "active_jobs": 0, "inactive_jobs": 0, "total_applications": 0}

        return jobs, total, summary

    def active_counts_by_title(self) -> Dict[str, int]:
        """Number of open postings per job title."""
        rows = self.collection.aggregate([
            {"$match": {"is_active": {"$ne": False}}},
            {"$group": {"_id": "$title", "count": {"$sum": 1}}}
        ])
        return {row["_id"]: row["count"] for row in rows}


# ============================================================
# COLLEGES COLLECTION
# Directory behind the institution autocomplete
# ============================================================

COLLEGE_CATEGORIES = ["Engineering", "Medical", "Management", "Arts & Science", "Law", "Other"]

CITY_MAPPINGS = {
    "mumbai": ("Mumbai", "Maharashtra"),
    "bombay": ("Mumbai", "Maharashtra"),
    "delhi": ("Delhi", "Delhi"),
    "bangalore": ("Bangalore", "Karnataka"),
    "bengaluru": ("Bangalore", "Karnataka"),
    "chennai": ("Chennai", "Tamil Nadu"),
    "madras": ("Chennai", "Tamil Nadu"),
    "hyderabad": ("Hyderabad", "Telangana"),
    "kolkata": ("Kolkata", "West Bengal"),
    "calcutta": ("Kolkata", "West Bengal"),
    "pune": ("Pune", "Maharashtra"),
    "ahmedabad": ("Ahmedabad", "Gujarat"),
    "jaipur": ("Jaipur", "Rajasthan"),
    "lucknow": ("Lucknow", "Uttar Pradesh"),
    "kanpur": ("Kanpur", "Uttar Pradesh"),
    "nagpur": ("Nagpur", "Maharashtra"),
    "indore": ("Indore", "Madhya Pradesh"),
    "bhopal": ("Bhopal", "Madhya Pradesh"),
    "visakhapatnam": ("Visakhapatnam", "Andhra Pradesh"),
    "coimbatore": ("Coimbatore", "Tamil Nadu"),
    "kochi": ("Kochi", "Kerala"),
    "thiruvananthapuram": ("Thiruvananthapuram", "Kerala"),
    "bhubaneswar": ("Bhubaneswar", "Odisha"),
    "guwahati": ("Guwahati", "Assam"),
    "chandigarh": ("Chandigarh", "Chandigarh"),
    "warangal": ("Warangal", "Telangana"),
    "vellore": ("Vellore", "Tamil Nadu"),
    "manipal": ("Manipal", "Karnataka"),
    "roorkee": ("Roorkee", "Uttarakhand"),
    "kharagpur": ("Kharagpur", "West Bengal"),
    "pilani": ("Pilani", "Rajasthan"),
    "greater noida": ("Greater Noida", "Uttar Pradesh"),
    "ghaziabad": ("Ghaziabad", "Uttar Pradesh"),
    "noida": ("Noida", "Uttar Pradesh"),
}

COLLEGE_FIELDS = {"name": 1, "category": 1, "location": 1, "usage_count": 1, "is_verified": 1}


def normalize_college_name(name: str) -> str:
    return " ".join(name.lower().split())


def categorize_college(name: str) -> str:
    """Guess a college category from keywords in its name."""
    lowered = name.lower()
    if any(k in lowered for k in ("medical", "aiims", "hospital")):
        return "Medical"
    if any(k in lowered for k in ("iim", "management", "business", "isb")):
        return "Management"
    if any(k in lowered for k in ("law", "juridical")):
        return "Law"
    if "engineering" not in lowered and any(k in lowered for k in ("arts", "science", "commerce")):
        return "Arts & Science"
    if any(k in lowered for k in ("engineering", "technology", "iit", "nit", "iiit", "institute of technology")):
        return "Engineering"
    return "Other"


def extract_location(name: str) -> dict:
    """Guess city/state from a known city name inside the college name."""
    lowered = name.lower()
    # Longer keys first so "greater noida" wins over "noida"
    for key in sorted(CITY_MAPPINGS, key=len, reverse=True):
        if key in lowered:
            city, state = CITY_MAPPINGS[key]
            return {"city": city, "state": state, "country": "India"}
    return {"city": "", "state": "", "country": "India"}


class CollegeService:
    """
    Handles the college directory.
    Names are de-duplicated on their normalized (lowercase) form and every
    repeated submission bumps usage_count, which drives popularity ordering.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["colleges"])

    def find_or_create(
        self,
        name: str,
        added_by: Optional[str] = None,
        category: Optional[str] = None,
        location: Optional[dict] = None
    ) -> Tuple[dict, bool]:
        """
        Find a college by normalized name (incrementing its usage) or create it.

        Returns:
            (college document, is_new)
        """
        name = name.strip()
        if not name:
            raise ValueError("College name is required")
        normalized = normalize_college_name(name)

        existing = self.collection.find_one_and_update(
            {"normalized_name": normalized},
            {"$inc": {"usage_count": 1}, "$set": {"updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        if existing:
            return serialize_doc(existing), False

        now = datetime.utcnow()
        doc = {
            "name": name,
            "normalized_name": normalized,
            "category": category or categorize_college(name),
            "location": location or extract_location(name),
            "is_verified": False,
            "is_user_added": True,
            "added_by": added_by,
            "usage_count": 1,
            "aliases": [],
            "created_at": now,
            "updated_at": now
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Someone inserted the same college between our lookup and insert
            return self.find_or_create(name, added_by, category, location)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc), True

    def popular(self, limit: int = 15) -> List[dict]:
        cursor = (
            self.collection.find({"usage_count": {"$gte": 2}}, COLLEGE_FIELDS)
            .sort([("usage_count", -1), ("name", 1)])
            .limit(limit)
        )
        return serialize_docs(cursor)

    def search(self, query: Optional[str], limit: int = 10) -> List[dict]:
        """Search by name or alias; short queries return popular colleges."""
        if not query or len(query.strip()) < 2:
            return self.popular(limit)

        term = query.lower().strip()
        cursor = (
            self.collection.find(
                {
                    "$or": [
                        {"normalized_name": _contains(term)},
                        {"name": _contains(term)},
                        {"aliases": _contains(term)}
                    ]
                },
                COLLEGE_FIELDS
            )
            .sort([("usage_count", -1), ("name", 1)])
            .limit(limit)
        )
        return serialize_docs(cursor)

    def by_region(self, region: str, limit: int = 20) -> List[dict]:
        cursor = (
            self.collection.find(
                {
                    "$or": [
                        {"location.city": _contains(region)},
                        {"location.state": _contains(region)},
                        {"normalized_name": _contains(region)}
                    ]
                },
                COLLEGE_FIELDS
            )
            .sort([("usage_count", -1), ("name", 1)])
            .limit(limit)
        )
        return serialize_docs(cursor)

    def bulk_add(self, names: List[str]) -> dict:
        results = {"added": 0, "updated": 0, "errors": []}
        for name in names:
            try:
                _, is_new = self.find_or_create(name)
            except (ValueError, PyMongoError) as e:
                results["errors"].append({"college": name, "error": str(e)})
                continue
            if is_new:
                results["added"] += 1
            else:
                results["updated"] += 1
        return results

    def stats(self) -> dict:
        categories = self.collection.aggregate([
            {"$group": {"_id": "$category", "count": {"$sum": 1}}},
            {"$sort": {"count": -1}}
        ])
        top_states = self.collection.aggregate([
            {"$group": {"_id": "$location.state", "count": {"$sum": 1}}},
            {"$sort": {"count": -1}},
            {"$limit": 10}
        ])
        return {
            "total": self.collection.count_documents({}),
            "verified": self.collection.count_documents({"is_verified": True}),
            "user_added": self.collection.count_documents({"is_user_added": True}),
            "popular": self.collection.count_documents({"usage_count": {"$gte": 5}}),
            "categories": [{"name": row["_id"], "count": row["count"]} for row in categories],
            "top_states": [{"name": row["_id"], "count": row["count"]} for row in top_states]
        }

    def set_verified(self, college_id: str, verified: bool = True) -> Optional[dict]:
        oid = _object_id(college_id)
        if oid is None:
            return None
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"is_verified": verified, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# SAVED JOBS COLLECTION
# ============================================================

class SavedJobService:
    """
    Handles jobs bookmarked by students.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["saved_jobs"])

    def save(self, student_phone: str, job: dict) -> Optional[dict]:
        """
        Save a job for a student with a snapshot of its details.

        Returns:
            The saved entry, or None if the job was already saved
        """
        doc = {
            "student_phone": student_phone,
            "job_id": job["job_id"],
            "job_title": job["title"],
            "company_name": job.get("company", {}).get("name", ""),
            "job_details": {
                "description": job.get("description"),
                "location": job.get("location"),
                "salary": job.get("salary"),
                "job_type": job.get("job_type"),
                "industry": job.get("industry"),
                "requirements": job.get("requirements")
            },
            "saved_at": datetime.utcnow()
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            return None
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def is_saved(self, student_phone: str, job_id: str) -> bool:
        return self.collection.count_documents(
            {"student_phone": student_phone, "job_id": job_id}, limit=1
        ) > 0

    def list_for_student(self, student_phone: str) -> List[dict]:
        cursor = self.collection.find({"student_phone": student_phone}).sort("saved_at", -1)
        return serialize_docs(cursor)

    def remove(self, student_phone: str, job_id: str) -> Optional[dict]:
        doc = self.collection.find_one_and_delete(
            {"student_phone": student_phone, "job_id": job_id}
        )
        return serialize_doc(doc)


# ============================================================
# JOB APPLICATIONS COLLECTION
# ============================================================

class ApplicationService:
    """
    Handles job applications.
    Each application keeps a snapshot of the student's profile at apply time.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["job_applications"])

    def has_applied(self, student_phone: str, job_id: str) -> bool:
        return self.collection.count_documents(
            {"student_phone": student_phone, "job_id": job_id}, limit=1
        ) > 0

    def apply(self, student: dict, job: dict, fitment_score: Optional[float] = None) -> Optional[dict]:
        """
        Create an application.

        Returns:
            The stored application, or None if the student already applied
        """
        now = datetime.utcnow()
        doc = {
            "student_phone": student["phone"],
            "student_name": student["name"],
            "student_email": student.get("email"),
            "job_id": job["job_id"],
            "job_title": job["title"],
            "company_name": job.get("company", {}).get("name", ""),
            "fitment_score": fitment_score,
            "status": "applied",
            "student_details": {
                "education": student.get("education"),
                "skills": [s.get("name") for s in student.get("skills", []) if s.get("name")],
                "experience": student.get("experience"),
                "assessment_score": student.get("assessment_score")
            },
            "applied_at": now,
            "updated_at": now
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            return None
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def list_for_company(self, company_name: str) -> List[dict]:
        cursor = self.collection.find(
            {"company_name": _contains(company_name)}
        ).sort("applied_at", -1)
        return serialize_docs(cursor)


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_student_service() -> StudentService:
    return StudentService()


def get_job_service() -> JobService:
    return JobService()


def get_college_service() -> CollegeService:
    return CollegeService()


def get_saved_job_service() -> SavedJobService:
    return SavedJobService()


def get_application_service() -> ApplicationService:
    return ApplicationService()
