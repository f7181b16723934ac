"""
MongoDB Service - CRUD operations for the platform's collections.

Collections in this database:
1. employers     - Employer accounts (email + bcrypt hash)
2. jobs          - Job postings, text-searchable by title/location
3. applications  - Candidate applications referencing a job

Documents keep camelCase field names (salaryRange, employerId, ...)
so they match the wire format one-to-one.
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from job_platform.core.errors import ConflictError, NotFoundError
from job_platform.db.mongodb import get_collection, COLLECTIONS


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            doc[key] = str(value)
    return doc


def serialize_docs(docs) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def is_valid_id(value: Any) -> bool:
    """True for 24-hex-character ObjectId strings."""
    return isinstance(value, str) and ObjectId.is_valid(value)


# ============================================================
# EMPLOYERS COLLECTION
# Credential store for authentication
# ============================================================

class EmployerStore:
    """
    Handles employer account storage.
    Passwords arrive here already hashed.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = (
            collection if collection is not None else get_collection(COLLECTIONS["employers"])
        )

    def find_by_email(self, email: str) -> Optional[dict]:
        """Fetch employer (including password hash) by email."""
        return serialize_doc(self.collection.find_one({"email": email}))

    def create(self, name: str, email: str, password_hash: str) -> dict:
        """
        Insert a new employer.

        Raises ConflictError if the email is already registered.
        """
        if self.collection.find_one({"email": email}, {"_id": 1}):
            raise ConflictError("Employer with that email already exists")

        now = utcnow()
        doc = {
            "name": name,
            "email": email,
            "password": password_hash,
            "createdAt": now,
            "updatedAt": now
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Lost a race against a concurrent registration (unique index)
            raise ConflictError("Employer with that email already exists")
        return serialize_doc(doc)


# ============================================================
# JOBS COLLECTION
# ============================================================

# Fields returned by search and detail lookups
JOB_PROJECTION = {
    "title": 1,
    "description": 1,
    "location": 1,
    "salaryRange": 1,
    "employerId": 1,
    "createdAt": 1,
    "updatedAt": 1
}


def build_search_filter(
    title: Optional[str] = None,
    location: Optional[str] = None,
    min_salary: Optional[float] = None,
    max_salary: Optional[float] = None
) -> dict:
    """
    Build the MongoDB filter for job search.

    - title/location are combined into ONE free-text query (text index),
      not matched as separate substrings.
    - min_salary keeps jobs whose salaryRange.min >= min_salary.
    - max_salary keeps jobs whose salaryRange.max <= max_salary.

    The salary bounds select jobs whose whole range sits inside the
    requested one, so a job paying 50k-90k does NOT match min_salary=60000.
    """
    filters: Dict[str, Any] = {}

    if title or location:
        filters["$text"] = {"$search": f"{title or ''} {location or ''}".strip()}

    if min_salary is not None:
        filters["salaryRange.min"] = {"$gte": min_salary}
    if max_salary is not None:
        filters["salaryRange.max"] = {"$lte": max_salary}

    return filters


class JobStore:
    """
    Handles job posting storage.
    Ownership is recorded as the employer id string in employerId.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = (
            collection if collection is not None else get_collection(COLLECTIONS["jobs"])
        )

    def create(self, job: dict, employer_id: str) -> dict:
        """
        Insert a job posting.

        Args:
            job: title, description, location, salaryRange (camelCase keys)
            employer_id: owning employer (from the access token)
        """
        now = utcnow()
        doc = {
            "title": job["title"],
            "description": job["description"],
            "location": job["location"],
            "salaryRange": job["salaryRange"],
            "employerId": str(employer_id),
            "createdAt": now,
            "updatedAt": now
        }
        self.collection.insert_one(doc)
        return serialize_doc(doc)

    def get_by_id(self, job_id: str) -> Optional[dict]:
        """Fetch a job by id; None for unknown or malformed ids."""
        if not is_valid_id(job_id):
            return None
        doc = self.collection.find_one({"_id": ObjectId(job_id)}, JOB_PROJECTION)
        return serialize_doc(doc)

    def get_owner(self, job_id: str) -> Optional[dict]:
        """Existence check projecting only _id and employerId."""
        if not is_valid_id(job_id):
            return None
        doc = self.collection.find_one({"_id": ObjectId(job_id)}, {"_id": 1, "employerId": 1})
        return serialize_doc(doc)

    def update(self, job_id: str, changes: dict) -> dict:
        """
        Apply a partial update.

        Only the keys present in `changes` are replaced; salaryRange is
        replaced as a whole. Raises NotFoundError if the job is gone.
        """
        if not is_valid_id(job_id):
            raise NotFoundError("Job not found")

        update = dict(changes)
        update["updatedAt"] = utcnow()
        doc = self.collection.find_one_and_update(
            {"_id": ObjectId(job_id)},
            {"$set": update},
            projection=JOB_PROJECTION,
            return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("Job not found")
        return serialize_doc(doc)

    def delete(self, job_id: str) -> None:
        """Delete a job. Raises NotFoundError if nothing was deleted."""
        if not is_valid_id(job_id):
            raise NotFoundError("Job not found")
        result = self.collection.delete_one({"_id": ObjectId(job_id)})
        if result.deleted_count == 0:
            raise NotFoundError("Job not found")

    def search(
        self,
        title: Optional[str] = None,
        location: Optional[str] = None,
        min_salary: Optional[float] = None,
        max_salary: Optional[float] = None
    ) -> List[dict]:
        """Search jobs (see build_search_filter for semantics)."""
        filters = build_search_filter(title, location, min_salary, max_salary)
        cursor = self.collection.find(filters, JOB_PROJECTION)
        return serialize_docs(cursor)


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationStore:
    """
    Handles candidate application storage.
    Inserts are unconditional: the same candidate may apply twice.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = (
            collection if collection is not None else get_collection(COLLECTIONS["applications"])
        )

    def create(self, job_id: str, candidate_name: str, candidate_email: str) -> dict:
        """Insert an application and return it with its id and applicationDate."""
        doc = {
            "candidateName": candidate_name,
            "candidateEmail": candidate_email,
            "jobId": ObjectId(job_id),
            "applicationDate": utcnow()
        }
        self.collection.insert_one(doc)
        return serialize_doc(doc)

    def list_for_job(self, job_id: str) -> List[dict]:
        """All applications for a job, newest first."""
        cursor = self.collection.find({"jobId": ObjectId(job_id)}).sort("applicationDate", -1)
        return serialize_docs(cursor)
