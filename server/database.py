# server/database.py

import logging
from pathlib import Path
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from models import Base, User, Category


logger = logging.getLogger(__name__)


SAMPLE_CATEGORIES = [
    {"name": "Summer Clothes", "item_count": 26, "image": "summer.jpg"},
    {"name": "Winter Collection", "item_count": 32, "image": "winter.jpg"},
    {"name": "Casual Wear", "item_count": 45, "image": "casual.jpg"},
    {"name": "Formal Attire", "item_count": 18, "image": "formal.jpg"},
    {"name": "Sports & Outdoor", "item_count": 29, "image": "sports.jpg"},
    {"name": "Accessories", "item_count": 52, "image": "accessories.jpg"},
]


def create_db_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        db_path = database_url.split("///", 1)[-1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine
    )


def init_db(engine: Engine):
    Base.metadata.create_all(bind=engine)


def seed_db(db: Session, hasher):
    """
    Inserts the admin account and the sample categories into empty tables.
    """
    if db.query(User).count() == 0:
        db.add(User(
            username="admin",
            email="admin@example.com",
            password=hasher.hash("password123"),
        ))
        db.commit()
        logger.info("Test user created: admin / password123")

    if db.query(Category).count() == 0:
        for sample in SAMPLE_CATEGORIES:
            db.add(Category(**sample))
        db.commit()
        logger.info("Sample categories added; copy their images into the upload folder")


def get_db(request: Request):
    db = request.app.state.SessionLocal()
    try:
        yield db
    finally:
        db.close()
