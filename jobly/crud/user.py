"""
CRUD operations for users and their job applications.

Passwords are stored as bcrypt hashes. Only authenticate() reads the
password column; every other query selects USER_COLUMNS, which leaves it out.
"""

import logging
from typing import List
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import dummy_verify, get_password_hash, verify_password
from jobly.crud.job import require_storable_id
from jobly.helpers.sql import execute, sql_for_partial_update
from jobly.models.application import Application
from jobly.models.user import User

logger = logging.getLogger(__name__)

USER_COLUMNS = """username,
                  first_name AS "firstName",
                  last_name AS "lastName",
                  email,
                  is_admin AS "isAdmin\""""

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def _to_user(row) -> dict:
    user = dict(row)
    # SQLite hands back 0/1 for booleans
    user["isAdmin"] = bool(user["isAdmin"])
    return user


def _select_one(db: Session, username: str):
    row = execute(
        db,
        f"""SELECT {USER_COLUMNS}
           FROM users
           WHERE username = $1""",
        [username],
    ).mappings().first()
    return _to_user(row) if row else None


def _exists(db: Session, query: str, key) -> bool:
    return execute(db, query, [key]).first() is not None


def authenticate(db: Session, username: str, password: str) -> dict:
    """
    Check a username/password pair.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        UnauthorizedError: unknown username or wrong password (same message
            for both, so callers cannot probe for usernames)
    """
    row = execute(
        db,
        f"""SELECT {USER_COLUMNS},
                  password
           FROM users
           WHERE username = $1""",
        [username],
    ).mappings().first()

    if row is None:
        dummy_verify()
    else:
        user = _to_user(row)
        hashed_password = user.pop("password")
        if verify_password(password, hashed_password):
            return user

    logger.info("Failed login attempt")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: dict) -> dict:
    """
    Create a user with a hashed password.

    Args:
        db: Database session
        data: {username, password, firstName, lastName, email, isAdmin}

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        BadRequestError: username already taken
    """
    username = data["username"]
    try:
        db.execute(
            insert(User).values(
                username=username,
                password=get_password_hash(data["password"]),
                first_name=data["firstName"],
                last_name=data["lastName"],
                email=data["email"],
                is_admin=bool(data.get("isAdmin", False)),
            )
        )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Duplicate username: {username}") from e

    logger.info(f"Registered user {username}")
    return _select_one(db, username)


def find_all(db: Session) -> List[dict]:
    """All users, ordered by username."""
    rows = execute(
        db,
        f"""SELECT {USER_COLUMNS}
           FROM users
           ORDER BY username""",
    ).mappings().all()
    return [_to_user(row) for row in rows]


def get(db: Session, username: str) -> dict:
    """
    Get a user with the ids of the jobs they applied to.

    Returns:
        {username, firstName, lastName, email, isAdmin, jobs}

    Raises:
        NotFoundError: no such user
    """
    user = _select_one(db, username)
    if not user:
        raise NotFoundError(f"No user: {username}")

    applications = execute(
        db,
        """SELECT job_id
           FROM applications
           WHERE username = $1
           ORDER BY job_id""",
        [username],
    ).all()
    user["jobs"] = [row.job_id for row in applications]
    return user


def update(db: Session, username: str, data: dict) -> dict:
    """
    Partial update: only the fields present in data change.

    Data can include: {firstName, lastName, password, email, isAdmin}

    A new password is hashed before it is stored. The returned record
    never includes the password.

    WARNING: this can set a new password or make a user an admin. Callers
    must restrict what reaches it.

    Raises:
        BadRequestError: no data, or the new values violate a constraint
        NotFoundError: no such user
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    username_var_idx = f"${len(values) + 1}"

    query = f"""UPDATE users
                SET {set_cols}
                WHERE username = {username_var_idx}"""
    try:
        result = execute(db, query, [*values, username])
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(f"Invalid user data for {username}") from e

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")
    return _select_one(db, username)


def remove(db: Session, username: str) -> None:
    """
    Delete a user and their applications.

    Raises:
        NotFoundError: no such user
    """
    result = execute(
        db,
        """DELETE
           FROM users
           WHERE username = $1""",
        [username],
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    A single INSERT: the foreign keys reject unknown users/jobs and the
    primary key rejects a second application for the same pair, so there
    is no window between checking and inserting. Only after a rejection
    are the two sides looked up, to report which one failed.

    Raises:
        NotFoundError: no such job, or no such user
        BadRequestError: the user already applied to this job
    """
    require_storable_id(job_id)
    try:
        db.execute(insert(Application).values(username=username, job_id=job_id))
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not _exists(db, "SELECT id FROM jobs WHERE id = $1", job_id):
            raise NotFoundError(f"No job: {job_id}") from e
        if not _exists(db, "SELECT username FROM users WHERE username = $1", username):
            raise NotFoundError(f"No user: {username}") from e
        raise BadRequestError(f"User {username} already applied to job {job_id}") from e

    logger.info(f"User {username} applied to job {job_id}")
