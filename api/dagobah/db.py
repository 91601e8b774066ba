from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .settings import Settings, settings

class Base(DeclarativeBase):
    pass

def get_db_url(cfg: Settings = settings):
    if cfg.DATABASE_URL:
        return cfg.DATABASE_URL
    return (f"postgresql://{cfg.POSTGRES_USER}:{cfg.POSTGRES_PASSWORD}"
            f"@{cfg.POSTGRES_HOST}:{cfg.POSTGRES_PORT}/{cfg.POSTGRES_DB}")

engine = create_engine(get_db_url(), pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def init_db(bind=None):
    # Tables are created via models import side-effect
    from . import models  # noqa
    Base.metadata.create_all(bind=bind or engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
