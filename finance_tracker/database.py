from loguru import logger
from sqlalchemy import Column, DateTime, Float, Integer, String, Text, create_engine, func, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class Transaction(Base):
    __tablename__ = 'transactions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    amount = Column(Float, nullable=False)
    category = Column(String, nullable=False, default='')
    description = Column(Text, default='')
    type = Column(String, nullable=False)  # "income" or "expense", not enforced
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)


def _masked(url) -> str:
    return url.render_as_string(hide_password=True)


def connect(database_url: str) -> Engine:
    """Open a connection pool to the store and verify it is reachable.

    Any failure here is fatal: the process exits instead of serving
    requests against a store it cannot reach.
    """
    try:
        url = make_url(database_url)
        connect_args = {}
        if url.get_backend_name() == 'sqlite':
            # Pool connections are shared by the request worker threads
            connect_args['check_same_thread'] = False
        engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
    except (ArgumentError, ImportError, ValueError) as e:
        logger.critical(f"Could not connect to database: {e}")
        raise SystemExit(1) from e

    try:
        with engine.connect() as conn:
            conn.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        logger.critical(f"Database unreachable: {e}")
        engine.dispose()
        raise SystemExit(1) from e

    logger.info(f"Connected to database at {_masked(url)}")
    return engine


def init_db(engine: Engine):
    """Create the transactions table if it does not exist yet."""
    Base.metadata.create_all(engine)


def get_session_factory(engine: Engine):
    """Create a session factory bound to the engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)
