"""
Job endpoints. Reads are public; writes need an admin token.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import CurrentUser, get_admin_user
from jobly.crud import job as job_crud
from jobly.schemas.job import (
    JobCreateRequest,
    JobDeletedResponse,
    JobDetailEnvelope,
    JobEnvelope,
    JobListResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user),
):
    """Create a job posting for an existing company."""
    # JSON mode turns equity into a decimal string the driver can bind
    job = job_crud.create(db, request.model_dump(by_alias=True, mode="json"))
    return {"job": job}


@router.get("", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by company name, then title.

    Filters (all optional, combined with AND):
    - title: title contains this, ignoring case
    - minSalary: salary at least this
    - hasEquity: when true, only jobs with non-zero equity
    """
    jobs = job_crud.find_all(
        db,
        min_salary=min_salary,
        has_equity=has_equity,
        title=title,
    )
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Get a job and the company offering it."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user),
):
    """Partially update a job: { title, salary, equity }."""
    data = request.model_dump(exclude_unset=True, by_alias=True, mode="json")
    return {"job": job_crud.update(db, job_id, data)}


@router.delete("/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: CurrentUser = Depends(get_admin_user),
):
    """Delete a job."""
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
