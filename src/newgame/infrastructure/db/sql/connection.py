from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


def create_session_factory(database_url: str, *, echo: bool = False) -> sessionmaker:
    engine = create_engine(database_url, echo=echo, future=True, pool_pre_ping=True)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
