from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from slotwise.core.config import get_settings


def build_engine(database_url: str, *, echo: bool = False):
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args, pool_pre_ping=True)


settings = get_settings()

engine = build_engine(settings.database_url, echo=settings.database_echo)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
