"""
Application startup tasks.

Handles initialization tasks that should run when the application starts:
- Logging configuration
- Database connection verification
- Session store connection verification
"""
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.database import engine
from app.services.session_service import get_session_store

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Apply LOG_LEVEL to the root logger."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def check_database() -> bool:
    """Verify the credential store is reachable."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("✅ Database connection verified")
        return True
    except SQLAlchemyError as e:
        logger.error(f"❌ Database connection failed: {e}")
        # Requests fail individually until the database is back
        logger.warning("⚠️  Application starting without database connectivity")
        return False


def check_session_store() -> bool:
    """Verify the session store is reachable."""
    if get_session_store().health_check():
        logger.info(f"✅ Session store ({settings.SESSION_BACKEND}) is reachable")
        return True

    logger.error(f"❌ Session store ({settings.SESSION_BACKEND}) is not reachable")
    logger.warning("⚠️  Logins will fail until the session store is available")
    return False


def run_startup_tasks() -> None:
    """
    Run all startup tasks.

    This function is called when the FastAPI application starts.
    """
    configure_logging()

    logger.info("=" * 60)
    logger.info("Running application startup tasks...")
    logger.info("=" * 60)

    check_database()
    check_session_store()

    logger.info("=" * 60)
    logger.info("✅ Startup tasks completed")
    logger.info("=" * 60)
