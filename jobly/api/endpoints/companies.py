"""
Company endpoints. Reads are public; writes need an admin token.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import CurrentUser, get_admin_user
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDeletedResponse,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user),
):
    """Create a company."""
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db),
):
    """
    List companies ordered by name.

    Filters (all optional, combined with AND):
    - name: name contains this, ignoring case
    - minEmployees: more employees than this
    - maxEmployees: fewer employees than this
    """
    companies = company_crud.find_all(
        db,
        name=name,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company and its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user),
):
    """
    Partially update a company: { name, description, numEmployees, logoUrl }.
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"company": company_crud.update(db, handle, data)}


@router.delete("/{handle}", response_model=CompanyDeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user),
):
    """Delete a company along with its jobs."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
