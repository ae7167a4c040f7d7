"""
CRUD operations for jobs.
"""

import logging
from typing import List, Optional
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.crud.company import COMPANY_COLUMNS
from jobly.helpers.sql import WhereClause, execute, sql_for_partial_update
from jobly.models.job import Job

logger = logging.getLogger(__name__)

JOB_COLUMNS = """id,
                  title,
                  salary,
                  equity,
                  company_handle AS "companyHandle\""""

# jobs.id is a 32-bit INTEGER; larger ids can never name a row
MAX_JOB_ID = 2**31 - 1


def require_storable_id(job_id: int) -> None:
    """Raise NotFoundError for an id outside the range of jobs.id."""
    if not 1 <= job_id <= MAX_JOB_ID:
        raise NotFoundError(f"No job: {job_id}")


def _select_one(db: Session, job_id: int) -> Optional[dict]:
    row = execute(
        db,
        f"""SELECT {JOB_COLUMNS}
           FROM jobs
           WHERE id = $1""",
        [job_id],
    ).mappings().first()
    return dict(row) if row else None


def create(db: Session, data: dict) -> dict:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: companyHandle does not name a company
    """
    company_handle = data["companyHandle"]
    try:
        result = db.execute(
            insert(Job).values(
                title=data["title"],
                salary=data.get("salary"),
                equity=data.get("equity"),
                company_handle=company_handle,
            )
        )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"No company: {company_handle}") from e

    job_id = result.inserted_primary_key[0]
    logger.info(f"Created job {job_id} for company {company_handle}")
    return _select_one(db, job_id)


def find_all(
    db: Session,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
    title: Optional[str] = None,
) -> List[dict]:
    """
    List jobs, optionally filtered, ordered by company name then title.

    Args:
        db: Database session
        min_salary: Only jobs paying at least this much
        has_equity: When true, only jobs offering non-zero equity
        title: Case-insensitive substring of the job title

    Returns:
        [{id, title, salary, equity, companyHandle, companyName}, ...]
    """
    where = WhereClause()
    if title:
        where.add("lower(j.title) LIKE '%' || lower({}) || '%'", title)
    if min_salary:
        where.add("j.salary >= {}", min_salary)
    if has_equity:
        where.add("j.equity > 0")

    rows = execute(
        db,
        f"""SELECT j.id,
                  j.title,
                  j.salary,
                  j.equity,
                  j.company_handle AS "companyHandle",
                  c.name AS "companyName"
           FROM jobs AS j
           LEFT JOIN companies AS c ON c.handle = j.company_handle
           {where.sql}
           ORDER BY c.name, j.title""",
        where.values,
    ).mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, job_id: int) -> dict:
    """
    Get a job with its company embedded.

    Returns:
        {id, title, salary, equity, company}
        where company is {handle, name, description, numEmployees, logoUrl}

    Raises:
        NotFoundError: no such job
    """
    require_storable_id(job_id)
    job = _select_one(db, job_id)
    if not job:
        raise NotFoundError(f"No job: {job_id}")

    company = execute(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           WHERE handle = $1""",
        [job.pop("companyHandle")],
    ).mappings().first()

    job["company"] = dict(company)
    return job


def update(db: Session, job_id: int, data: dict) -> dict:
    """
    Partial update: only the fields present in data change.

    Data can include: {title, salary, equity}

    Raises:
        BadRequestError: no data, or the new values violate a constraint
        NotFoundError: no such job
    """
    require_storable_id(job_id)
    set_cols, values = sql_for_partial_update(data, {})
    id_var_idx = f"${len(values) + 1}"

    query = f"""UPDATE jobs
                SET {set_cols}
                WHERE id = {id_var_idx}"""
    try:
        result = execute(db, query, [*values, job_id])
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Invalid job data for {job_id}") from e

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return _select_one(db, job_id)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job and the applications to it.

    Raises:
        NotFoundError: no such job
    """
    require_storable_id(job_id)
    result = execute(
        db,
        """DELETE
           FROM jobs
           WHERE id = $1""",
        [job_id],
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
