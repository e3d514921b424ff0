from fastapi import status
from fastapi_problem.error import StatusProblem


class DatabaseError(StatusProblem):
    """
    An base error indicating that a store operation failed.
    """

    type_ = "database_error"
    title = "Database Error"
    detail = "An error occurred while accessing the store."
    status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail=None, **kwargs):
        super().__init__(detail=detail or self.detail, **kwargs)


class DuplicateRecordError(DatabaseError):
    """
    An error indicating that a write violated a uniqueness constraint.

    The offending field name is carried in ``field``.
    """

    type_ = "duplicate_record"
    title = "Duplicate Record"
    detail = "A record with the same unique value already exists."
    status = status.HTTP_409_CONFLICT

    def __init__(self, field: str, detail: str | None = None, **kwargs):
        self.field = field
        super().__init__(detail=detail, field=field, **kwargs)
