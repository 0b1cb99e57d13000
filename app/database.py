# app/database.py
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import func
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session, select

from app.models.product import Product
from app.seed import SAMPLE_PRODUCTS


class Database:
    """
    Owns the SQLAlchemy engine for one application instance.

    Lifecycle (driven by the FastAPI lifespan in app.main):

        db = Database(url)
        db.create_db_and_tables()
        db.seed_products()
        ...serve requests, one Session per request...
        db.dispose()

    SQLite notes:
      - check_same_thread=False: sync routes run in FastAPI's threadpool,
        so a connection may be used by a thread other than its creator.
      - ":memory:" URLs use a StaticPool so every session sees the same
        in-memory database.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        kwargs: dict = {"echo": echo}

        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True

        self.engine = create_engine(url, **kwargs)

    def create_db_and_tables(self) -> None:
        """
        Create all tables defined in SQLModel metadata if they do not exist.

        This is called once on application startup.
        """
        SQLModel.metadata.create_all(self.engine)

    def seed_products(self) -> int:
        """
        Insert the sample jewellery catalog if the products table is empty.

        Returns:
            Number of products inserted (0 if the catalog already had rows).
        """
        with Session(self.engine) as session:
            count = session.exec(select(func.count()).select_from(Product)).one()
            if count:
                return 0
            session.add_all(Product(**data) for data in SAMPLE_PRODUCTS)
            session.commit()
            return len(SAMPLE_PRODUCTS)

    @contextmanager
    def session(self) -> Iterator[Session]:
        with Session(self.engine) as session:
            yield session

    def dispose(self) -> None:
        self.engine.dispose()


def get_session(request: Request):
    """
    FastAPI dependency that yields a SQLModel Session from the app's Database.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with request.app.state.db.session() as session:
        yield session
