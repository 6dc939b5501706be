import logging

from blog_api.db.postgres.base import Base, SessionLocal, engine
from blog_api.db.seed import seed_database

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        inserted = seed_database(session)
        logger.info(f"Seeding completed, {inserted} posts inserted.")
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
    finally:
        session.close()
