import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv

load_dotenv()

Base = declarative_base()


def get_database_url() -> str:
    """Get database URL from environment."""
    url = os.getenv("DATABASE_URL", "sqlite:///./uplift.db")
    # Ensure psycopg (v3) driver is used
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    elif url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg://", 1)
    return url


def get_engine(url: str = None):
    """Get or create database engine."""
    url = url or get_database_url()
    connect_args = {}
    if url.startswith("sqlite"):
        # Route handlers run in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(
        url,
        echo=os.getenv("DEBUG", "false").lower() == "true",
        connect_args=connect_args,
        future=True,
    )


DATABASE_URL = get_database_url()
engine = get_engine(DATABASE_URL)
SessionLocal = sessionmaker(
    bind=engine, autocommit=False, autoflush=False, expire_on_commit=False, future=True
)
