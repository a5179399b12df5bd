import logging

from blog_api.crud import crud_role
from blog_api.database import Database

logger = logging.getLogger(__name__)


def init_db(database: Database) -> None:
    """Create tables and the default roles."""
    database.create_all()
    db = database.session()
    try:
        crud_role.ensure_defaults(db)
    finally:
        db.close()
    logger.info("Database initialized")


def main():
    from blog_api.config import settings

    logging.basicConfig(level=settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    try:
        init_db(database)
    finally:
        database.dispose()
    print("✅ Tables and default roles created successfully")

if __name__ == "__main__":
    main()
