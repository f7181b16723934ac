"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Field names are snake_case in Python and camelCase on the wire
(and in the stored documents).
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)

class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class TokenResponse(CamelModel):
    token: str

class EmployerResponse(CamelModel):
    employer_id: str
    email: str


# ============================================================
# JOB SCHEMAS
# ============================================================

class SalaryRange(BaseModel):
    # min <= max is not enforced
    min: float
    max: float

class JobCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    salary_range: SalaryRange

class JobUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    salary_range: Optional[SalaryRange] = None

class JobResponse(CamelModel):
    id: str = Field(..., alias="_id")
    title: str
    description: str
    location: str
    salary_range: SalaryRange
    employer_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(CamelModel):
    # Checked by the submission pipeline so that every bad field
    # (including the path jobId) is reported together
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None

class ApplicationResponse(CamelModel):
    id: str = Field(..., alias="_id")
    candidate_name: str
    candidate_email: str
    job_id: str
    application_date: datetime


# ============================================================
# REAL-TIME EVENT SCHEMAS
# ============================================================

class CandidateInfo(CamelModel):
    candidate_name: str
    candidate_email: str

class NewApplicationEvent(CamelModel):
    job_id: str
    candidate: CandidateInfo


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str

class FieldError(BaseModel):
    field: str
    message: str

class ErrorResponse(BaseModel):
    error: str

class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]
