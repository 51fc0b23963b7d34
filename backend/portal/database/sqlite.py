# sqlite.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from portal.config import settings

SQLALCHEMY_DATABASE_URI = settings.SQLALCHEMY_DATABASE_URI

# FastAPI 워커 스레드에서 같은 연결을 쓰기 위해 check_same_thread 해제
engine = create_engine(
    SQLALCHEMY_DATABASE_URI,
    connect_args={"check_same_thread": False},
    echo=False
)

Base = declarative_base()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
