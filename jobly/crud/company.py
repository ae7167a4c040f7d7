"""
CRUD operations for companies.
"""

import logging
from typing import List, Optional
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.helpers.sql import WhereClause, execute, sql_for_partial_update
from jobly.models.company import Company

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = """handle,
                  name,
                  description,
                  num_employees AS "numEmployees",
                  logo_url AS "logoUrl\""""

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def _select_one(db: Session, handle: str) -> Optional[dict]:
    row = execute(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           WHERE handle = $1""",
        [handle],
    ).mappings().first()
    return dict(row) if row else None


def create(db: Session, data: dict) -> dict:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: handle or name already in use
    """
    handle = data["handle"]
    name = data["name"]
    try:
        db.execute(
            insert(Company).values(
                handle=handle,
                name=name,
                description=data["description"],
                num_employees=data.get("numEmployees"),
                logo_url=data.get("logoUrl"),
            )
        )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _select_one(db, handle):
            raise BadRequestError(f"Duplicate company: {handle}") from e
        raise BadRequestError(f"Duplicate company name: {name}") from e

    logger.info(f"Created company {handle}")
    return _select_one(db, handle)


def find_all(
    db: Session,
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[dict]:
    """
    List companies, optionally filtered, ordered by name.

    Args:
        db: Database session
        name: Case-insensitive substring of the company name
        min_employees: Only companies with more employees than this
        max_employees: Only companies with fewer employees than this

    Raises:
        BadRequestError: min_employees greater than max_employees
    """
    if min_employees and max_employees and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    where = WhereClause()
    if name:
        where.add("lower(name) LIKE '%' || lower({}) || '%'", name)
    if min_employees:
        where.add("num_employees > {}", min_employees)
    if max_employees:
        where.add("num_employees < {}", max_employees)

    rows = execute(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           {where.sql}
           ORDER BY name""",
        where.values,
    ).mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, handle: str) -> dict:
    """
    Get a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: no such company
    """
    company = _select_one(db, handle)
    if not company:
        raise NotFoundError(f"No company: {handle}")

    jobs = execute(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    ).mappings().all()
    company["jobs"] = [dict(job) for job in jobs]
    return company


def update(db: Session, handle: str, data: dict) -> dict:
    """
    Partial update: only the fields present in data change.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: no data, or the new values violate a constraint
        NotFoundError: no such company
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    handle_var_idx = f"${len(values) + 1}"

    query = f"""UPDATE companies
                SET {set_cols}
                WHERE handle = {handle_var_idx}"""
    try:
        result = execute(db, query, [*values, handle])
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Invalid company data for {handle}") from e

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return _select_one(db, handle)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company. Its jobs (and their applications) go with it.

    Raises:
        NotFoundError: no such company
    """
    result = execute(
        db,
        """DELETE
           FROM companies
           WHERE handle = $1""",
        [handle],
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
