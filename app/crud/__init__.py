"""
CRUD operations (Create, Read, Update, Delete) for the Jobly resources.

This layer keeps the SQL out of the API routes: each module owns the
statements for one resource and raises app.core.exceptions errors.
"""

from app.crud import company, job, user

__all__ = ["company", "job", "user"]
