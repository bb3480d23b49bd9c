# storefront/data/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL, SQL_ECHO
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _connect_args(url: str) -> dict:
    # sqlite connection objects are bound to the creating thread by default
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def _unicode_lower(value):
    if value is None:
        return None
    return str(value).lower()


def make_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    engine = create_engine(url, echo=SQL_ECHO, connect_args=_connect_args(url), **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _configure_sqlite(dbapi_conn, _record):
            # ON DELETE CASCADE / SET NULL are ignored by sqlite unless enabled per connection
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            # builtin lower() only folds ASCII; name search and the unique name index need full case folding
            dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)

    return engine


engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    # every model has to be registered on Base.metadata before create_all
    import storefront.data.models  # noqa: F401

    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=bind or engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")
