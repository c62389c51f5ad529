from typing import NoReturn, Optional

# Severity codes understood by the host import pipeline
SEVERE = 500
WARN = 400
SKIP = 300
SKIP_ROW = 301


class DataImportHandlerException(Exception):
    """
    Raised when an import step cannot continue.
    The host pipeline reads `err_code` to decide whether to abort the job
    (SEVERE), skip the current document (SKIP / SKIP_ROW) or just warn.
    """

    def __init__(self, err_code: int, message: Optional[str] = None, cause: Optional[BaseException] = None):
        if message is None and cause is not None:
            message = str(cause)
        super().__init__(message)
        self.err_code = err_code
        self.cause = cause

    def __str__(self) -> str:
        return f"[{self.err_code}] {super().__str__()}"


def wrap_and_raise(err_code: int, error: BaseException, message: Optional[str] = None) -> NoReturn:
    """
    Re-raises `error` as a DataImportHandlerException.
    An error that already is one passes through untouched so its code is kept.
    """
    if isinstance(error, DataImportHandlerException):
        raise error
    raise DataImportHandlerException(err_code, message, cause=error) from error
