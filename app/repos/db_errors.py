# app/repos/db_errors.py
from functools import wraps

from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError

from app.domain.errors import BackendUnavailable, PersistenceError


def to_domain_error(e: SQLAlchemyError) -> PersistenceError:
    #polaczenie / timeout -> BackendUnavailable, reszta -> PersistenceError
    if isinstance(e, (OperationalError, InterfaceError)):
        return BackendUnavailable(str(e.orig or e))
    return PersistenceError(str(e))


def translate_db_errors(fn):
    """Zamienia wyjatki SQLAlchemy na bledy domenowe (PersistenceError / BackendUnavailable)."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as e:
            raise to_domain_error(e) from e

    return wrapper
