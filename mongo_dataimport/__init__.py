"""MongoDB data source for DataImportHandler-style import jobs."""

from mongo_dataimport.exceptions import DataImportHandlerException
from mongo_dataimport.extract.mongo_source import MongoDataSource

__all__ = ["DataImportHandlerException", "MongoDataSource"]
