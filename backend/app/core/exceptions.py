from typing import Optional

from sqlalchemy.exc import DBAPIError, DisconnectionError, InterfaceError, OperationalError


# SQLSTATE raised by postgres when statement_timeout cancels a query
QUERY_CANCELED_SQLSTATE = "57014"
# SQLSTATE class 08: connection exceptions
CONNECTION_EXCEPTION_CLASS = "08"


class DataAccessError(Exception):
    """The data store is unreachable or dropped the connection."""


class StatementTimeoutError(Exception):
    """A query ran past the store's statement time budget.

    This is the only error that moves the attendee fetcher to its next
    fallback strategy.
    """


def _sqlstate(error: DBAPIError) -> Optional[str]:
    orig = getattr(error, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def translate_db_error(error: Exception) -> Exception:
    """
    Map a driver/SQLAlchemy error onto the domain taxonomy.

    Returns the exception that should be raised in its place. Errors that
    are neither timeouts nor connection failures come back unchanged.
    """
    if isinstance(error, DisconnectionError):
        return DataAccessError(str(error))

    if not isinstance(error, DBAPIError):
        return error

    code = _sqlstate(error)
    if code == QUERY_CANCELED_SQLSTATE:
        return StatementTimeoutError(str(error.orig))

    if code and code.startswith(CONNECTION_EXCEPTION_CLASS):
        return DataAccessError(str(error.orig))

    # No SQLSTATE means the server never answered: the connection itself failed
    if isinstance(error, (OperationalError, InterfaceError)) and (
        code is None or error.connection_invalidated
    ):
        return DataAccessError(str(error.orig))

    return error
