from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def _make_engine(database_url: str, echo: bool = False):
    # For SQLite, we need to allow sharing connections across worker threads
    connect_args = {}
    if database_url.startswith('sqlite'):
        connect_args['check_same_thread'] = False

    return create_engine(database_url, echo=echo, connect_args=connect_args)


def create_session_factory(database_url: str, echo: bool = False):
    """
    Create a session factory.

    Every batch write opens its own session from the factory, so each batch
    runs in its own transaction while the engine's pool is shared.

    Args:
        database_url: SQLAlchemy database URL
        echo: Whether to echo SQL statements

    Returns:
        sessionmaker bound to a new engine
    """
    engine = _make_engine(database_url, echo=echo)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(database_url: str, echo: bool = False):
    """
    Initialize database tables.

    Args:
        database_url: SQLAlchemy database URL
        echo: Whether to echo SQL statements
    """
    engine = _make_engine(database_url, echo=echo)
    Base.metadata.create_all(bind=engine)
