from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Mapping, Optional


class DataSource(ABC):
    """
    Abstract Base Class for the sources an import job pulls rows from.
    Enforces the lifecycle the host pipeline drives: init -> get_data* -> close.
    """

    @abstractmethod
    def init(self, init_props: Mapping[str, Any], context: Optional[Any] = None) -> None:
        """
        Prepares the source from the host's configuration properties.

        Args:
            init_props: Flat mapping of property name to (string) value.
            context: Opaque host context for the running import job, if any.
        """
        pass

    @abstractmethod
    def get_data(self, query: str) -> Iterator[Dict[str, Any]]:
        """
        Runs a query and returns its rows.

        Returns:
            Iterator yielding one field-name -> value dict per matched record.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Releases everything the source holds. Must not raise."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
