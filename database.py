from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def resolve_url(database_url: str, database_key: str = "") -> URL:
    """
    The database key fills in the password of a networked database URL that
    does not carry one.
    """
    url = make_url(database_url)
    if database_key and url.host and not url.password:
        url = url.set(password=database_key)
    return url


def build_engine(database_url: str, database_key: str = "") -> Engine:
    url = resolve_url(database_url, database_key)

    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)

        # SQLite leaves foreign keys off unless asked per connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    # Create tables
    import models  # noqa: F401  registers the tables on Base
    Base.metadata.create_all(bind=engine)
