import sys

from bson import json_util
from dotenv import load_dotenv

from mongo_dataimport.config.settings import properties_from_env
from mongo_dataimport.extract.mongo_source import MongoDataSource
from mongo_dataimport.utils.logger import setup_logger

logger = setup_logger()


def run_import(collection: str, query: str, out=sys.stdout) -> int:
    """
    Pulls every row matching `query` from `collection` and writes it to `out`
    as one Extended JSON document per line. Returns the number of rows written.
    """
    rows = 0
    with MongoDataSource() as source:
        source.init(properties_from_env())
        for row in source.get_data(query, collection):
            out.write(json_util.dumps(row) + "\n")
            rows += 1
    return rows


def main():
    """
    Main Entry Point for one-off imports.
    Usage: python main.py <collection> [query]
    Connection properties come from MONGO_* environment variables (.env supported).
    """
    # Load .env variables
    load_dotenv()

    if len(sys.argv) < 2:
        logger.error("No collection specified. Usage: python main.py <collection> [query]")
        sys.exit(1)

    collection = sys.argv[1]
    query = sys.argv[2] if len(sys.argv) > 2 else "{}"

    logger.info(f"Starting import. Collection: {collection} | Query: {query}")

    try:
        rows = run_import(collection, query)
        logger.info(f"🏁 Import finished. {rows} rows written.")
    except Exception:
        logger.exception("Critical Import Failure")
        sys.exit(1)


if __name__ == "__main__":
    main()
