"""
Pydantic schemas for Company API requests/responses.

Field names are snake_case in Python and camelCase on the wire.
"""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class CompanyUpdateRequest(BaseModel):
    """Partial update: only supplied fields change. The handle is fixed."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class CompanyResponse(BaseModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CompanyJob(BaseModel):
    """Job summary embedded in a company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None


class CompanyDetailResponse(CompanyResponse):
    jobs: List[CompanyJob] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]


class CompanyDeletedResponse(BaseModel):
    deleted: str
