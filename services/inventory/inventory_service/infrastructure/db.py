from sqlalchemy import create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import sessionmaker, Session
from inventory_service.core_settings import Settings, get_settings
from inventory_service.domain.models import Base


def build_database_url(settings: Settings):
    """DATABASE_URL wins; otherwise a unix socket when INSTANCE_UNIX_SOCKET is set, else TCP."""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    if settings.INSTANCE_UNIX_SOCKET:
        return URL.create(
            "postgresql+psycopg2",
            username=settings.POSTGRES_USER,
            password=settings.POSTGRES_PASSWORD,
            database=settings.POSTGRES_DB,
            query={"host": settings.INSTANCE_UNIX_SOCKET},
        )
    return URL.create(
        "postgresql+psycopg2",
        username=settings.POSTGRES_USER,
        password=settings.POSTGRES_PASSWORD,
        host=settings.POSTGRES_HOST,
        port=settings.POSTGRES_PORT,
        database=settings.POSTGRES_DB,
    )


def build_engine(settings: Settings):
    url = build_database_url(settings)
    if make_url(url).get_backend_name() == "sqlite":
        return create_engine(url, echo=False, future=True)
    return create_engine(
        url,
        echo=False,
        future=True,
        pool_size=settings.DB_POOL_MAX,
        max_overflow=0,
        pool_timeout=settings.DB_POOL_ACQUIRE_TIMEOUT,
        pool_recycle=settings.DB_POOL_IDLE,
        pool_pre_ping=True,
    )


engine = build_engine(get_settings())
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_models():
    Base.metadata.create_all(engine)
