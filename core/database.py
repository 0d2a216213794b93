# Shipment Memo Service
# Pre-shipment documentation and export memo management
# v1.0.0.0


# Library declaration and packages to be installed
import os
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
load_dotenv()

# Memo service database url (postgresql in deployment, sqlite for local runs)
DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:

    raise ValueError("DATABASE_URL not found in .env file")

engine = create_engine(
    DATABASE_URL,

    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},

    pool_pre_ping=True,

    echo=os.getenv("SQL_ECHO", "false").lower() in {"1", "true", "yes"}

)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """
    Dependency to provide a DB session for FastAPI routes.
    One session per request; the orchestrator commits or rolls back on it.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
