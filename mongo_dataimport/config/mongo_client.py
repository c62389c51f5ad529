import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from mongo_dataimport.config.settings import MongoDataSourceConfig

# Configure logging
logger = logging.getLogger(__name__)


class DataImportMongoClient:
    """
    Wrapper for the MongoDB connection used by one data source instance.
    Owns the pymongo client from init until close.
    """

    def __init__(self, config: MongoDataSourceConfig):
        self._config = config
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    def _client_kwargs(self) -> dict:
        kwargs = {}
        if self._config.has_credentials:
            kwargs["username"] = self._config.username
            kwargs["password"] = self._config.password
            kwargs["authSource"] = self._config.auth_source
        if self._config.server_selection_timeout_ms is not None:
            kwargs["serverSelectionTimeoutMS"] = self._config.server_selection_timeout_ms
        return kwargs

    def create(self) -> Database:
        """
        Creates the client and selects the target database.
        pymongo connects lazily, so nothing hits the network until ping().
        """
        logger.info(f"🔌 Connecting to {self._config.uri} | Database: {self._config.database}")

        self._client = MongoClient(self._config.uri, **self._client_kwargs())
        self._db = self._client.get_database(self._config.database)
        return self._db

    def ping(self) -> None:
        """Lightweight verification command against the target database."""
        self._db.command("ping")

    @property
    def database(self) -> Optional[Database]:
        return self._db

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def close(self) -> None:
        """Closes the connection. Calling it again is a no-op."""
        if self._client is None:
            return
        client, self._client, self._db = self._client, None, None
        client.close()
        logger.info("MongoDB connection closed.")
