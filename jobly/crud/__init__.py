"""
CRUD operations (Create, Read, Update, Delete) for companies, jobs and users.

Each module is a set of plain functions taking a database session first.
Results are dicts keyed by API (camelCase) field names; failures raise
the exceptions in jobly.core.exceptions.
"""

from jobly.crud import company, job, user

__all__ = ["company", "job", "user"]
