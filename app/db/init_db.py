import psycopg2
from psycopg2 import sql
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

def create_database():
    """Create the PostgreSQL database if it doesn't exist. No-op for other backends."""
    if not settings.DATABASE_URL.startswith("postgresql"):
        logger.info("Non-PostgreSQL DATABASE_URL, skipping database creation.")
        return

    try:
        # Connect to default 'postgres' database to check/create target DB
        con = psycopg2.connect(
            user=settings.POSTGRES_USER,
            password=settings.POSTGRES_PASSWORD,
            host=settings.POSTGRES_SERVER,
            port=settings.POSTGRES_PORT,
            dbname="postgres"
        )
    except psycopg2.Error as e:
        # Proceeding anyway, maybe it exists or connection params are for the target DB directly
        logger.error(f"Could not connect to check database {settings.POSTGRES_DB}: {e}")
        return

    try:
        con.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        with con.cursor() as cur:
            cur.execute(
                "SELECT 1 FROM pg_catalog.pg_database WHERE datname = %s",
                (settings.POSTGRES_DB,),
            )
            if cur.fetchone():
                logger.info(f"Database {settings.POSTGRES_DB} already exists.")
                return

            logger.info(f"Database {settings.POSTGRES_DB} does not exist. Creating...")
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(settings.POSTGRES_DB)))
            logger.info(f"Database {settings.POSTGRES_DB} created successfully.")
    except psycopg2.Error as e:
        logger.error(f"Error creating database: {e}")
    finally:
        con.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_database()
