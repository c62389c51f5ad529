import logging
import time
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.cursor import Cursor
from pymongo.database import Database

from mongo_dataimport.config.mongo_client import DataImportMongoClient
from mongo_dataimport.config.settings import DATABASE, MongoDataSourceConfig
from mongo_dataimport.exceptions import SEVERE, DataImportHandlerException, wrap_and_raise
from mongo_dataimport.extract.base_source import DataSource
from mongo_dataimport.extract.query import parse_query

logger = logging.getLogger(__name__)


class ResultSetIterator:
    """
    Forward-only iterator over one query's cursor.
    Each row is a fresh dict copy of the document, values untouched.
    The cursor is closed as soon as exhaustion (or a failure) is detected.
    """

    def __init__(self, cursor: Optional[Cursor]):
        self._cursor = cursor
        # Document fetched by has_next() and not yet handed out
        self._pending: Optional[Mapping[str, Any]] = None
        self._exhausted = cursor is None

    def __iter__(self):
        return self

    def __next__(self) -> Dict[str, Any]:
        if not self.has_next():
            raise StopIteration
        return self._get_row()

    def has_next(self) -> bool:
        if self._exhausted:
            return False
        if self._pending is not None:
            return True

        try:
            self._pending = self._cursor.next()
            return True
        except StopIteration:
            self.close()
            return False
        except Exception as e:
            self.close()
            wrap_and_raise(SEVERE, e)

    def _get_row(self) -> Dict[str, Any]:
        doc, self._pending = self._pending, None
        return {key: doc[key] for key in doc}

    def close(self) -> None:
        self._exhausted = True
        self._pending = None
        try:
            if self._cursor is not None:
                self._cursor.close()
        except Exception:
            logger.warning("Exception while closing cursor", exc_info=True)


class MongoDataSource(DataSource):
    """
    Data source that serves rows from a MongoDB collection.

    Usage:
        with MongoDataSource() as source:
            source.init({"database": "shop", "host": "db1"})
            for row in source.get_data('{"status": "active"}', "orders"):
                ...
    """

    def __init__(self):
        self.context = None
        self.config: Optional[MongoDataSourceConfig] = None
        self._client: Optional[DataImportMongoClient] = None
        self._db: Optional[Database] = None
        self._collection: Optional[Collection] = None
        self._result_set: Optional[ResultSetIterator] = None

    def init(self, init_props: Mapping[str, Any], context: Optional[Any] = None) -> None:
        """
        Validates the properties, connects and pings the target database.

        Raises:
            DataImportHandlerException (SEVERE): missing database, invalid
            properties, or a connection / liveness check failure.
        """
        if self._client is not None:
            self.close()

        self.context = context

        if init_props.get(DATABASE) is None:
            raise DataImportHandlerException(SEVERE, "Database must be supplied")

        try:
            self.config = MongoDataSourceConfig.from_properties(init_props)
        except ValidationError as e:
            wrap_and_raise(SEVERE, e, f"Invalid MongoDB data source properties: {e}")

        self._client = DataImportMongoClient(self.config)
        try:
            self._db = self._client.create()
            try:
                self._client.ping()
                logger.info("✅ Successfully connected to MongoDB")
            except Exception as e:
                raise DataImportHandlerException(
                    SEVERE, f"Failed to connect to MongoDB: {e}", cause=e
                ) from e
        except Exception as e:
            # A client that never became usable is not kept around
            self._close_client()
            wrap_and_raise(SEVERE, e, f"Unable to connect to MongoDB: {e}")

        if self.config.collection:
            self._collection = self._db.get_collection(self.config.collection)

    def get_data(self, query: str, collection: Optional[str] = None) -> ResultSetIterator:
        """
        Runs `query` (Extended JSON filter text) against `collection`, or against
        the last selected collection when none is given.

        Any cursor left open by a previous query is closed first.
        """
        if self._db is None:
            raise DataImportHandlerException(SEVERE, "MongoDB data source is not initialized")

        if collection is not None:
            self._collection = self._db.get_collection(collection)
        if self._collection is None:
            raise DataImportHandlerException(SEVERE, "Collection must be supplied")

        self._close_cursor()

        try:
            query_object = parse_query(query)
            logger.debug(f"Executing MongoQuery: {query}")

            start = time.perf_counter()
            cursor = self._collection.find(query_object)
            logger.debug(f"Time taken for mongo: {(time.perf_counter() - start) * 1000:.1f} ms")

            self._result_set = ResultSetIterator(cursor)
            return self._result_set
        except Exception as e:
            wrap_and_raise(SEVERE, e, f"Error executing query: {e}")

    def _close_cursor(self) -> None:
        # Closing through the iterator also stops it serving rows already buffered by the driver
        result_set, self._result_set = self._result_set, None
        if result_set is not None:
            result_set.close()

    def _close_client(self) -> None:
        client, self._client = self._client, None
        self._db = None
        self._collection = None
        if client is None:
            return
        try:
            client.close()
        except Exception:
            logger.warning("Exception while closing MongoDB client", exc_info=True)

    def close(self) -> None:
        """Best-effort shutdown: cursor and client are released independently."""
        self._close_cursor()
        self._close_client()
