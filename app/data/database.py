# app/data/database.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.repos.db_errors import to_domain_error
from app.utils.settings import DATABASE_URL

engine = create_engine(DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    #jedna sesja na request
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Jedna transakcja na operacje logiczna (np. cale add_products).
    commit na koniec, rollback przy dowolnym wyjatku.
    Blad przy samym commit tez konczy sie bledem domenowym.
    """
    try:
        yield db
    except Exception:
        db.rollback()
        raise

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise to_domain_error(e) from e
