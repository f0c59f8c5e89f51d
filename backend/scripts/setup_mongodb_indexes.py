"""Create the MongoDB indexes the store relies on.

Collections:
- users: unique username, unique email, session_token lookup
- meals: session_token lookup

The app also ensures these on startup; this script is for provisioning
a database ahead of the first deploy.

Usage:
    python scripts/setup_mongodb_indexes.py

Environment Variables:
    MONGODB_URI: MongoDB connection string (required)
    MONGODB_DATABASE: Database name (default: dailydiet)
"""

import asyncio
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient

from infrastructure.config import get_mongodb_database, get_mongodb_uri
from infrastructure.persistence.factory import DEFAULT_UNIQUE_FIELDS
from infrastructure.persistence.mongodb.store import MongoStore

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def setup_all_indexes() -> None:
    uri = get_mongodb_uri()
    if not uri:
        logger.error("MONGODB_URI not configured")
        sys.exit(1)

    database_name = get_mongodb_database()
    client = AsyncIOMotorClient(uri, tz_aware=True)
    store = MongoStore(client=client, database_name=database_name, unique_fields=DEFAULT_UNIQUE_FIELDS)

    try:
        await client.admin.command("ping")
        logger.info(f"Connected to MongoDB: {database_name}")

        await store.ensure_indexes()

        for collection in ("users", "meals"):
            indexes = await client[database_name][collection].index_information()
            for name, info in indexes.items():
                unique = " (unique)" if info.get("unique") else ""
                logger.info(f"  {collection}.{name}: {info['key']}{unique}")
    finally:
        store.close()


def main() -> None:
    try:
        asyncio.run(setup_all_indexes())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
