"""
Map ledger errors to HTTP errors.
"""

from fastapi import HTTPException

from banking_ledger.exceptions import (
    AuthenticationFailed,
    DuplicateKey,
    NotFound,
)


def http_error(e: ValueError) -> HTTPException:
    if isinstance(e, NotFound):
        status_code = 404
    elif isinstance(e, AuthenticationFailed):
        status_code = 401
    elif isinstance(e, DuplicateKey):
        status_code = 409
    else:
        status_code = 400
    return HTTPException(status_code=status_code, detail=str(e))
