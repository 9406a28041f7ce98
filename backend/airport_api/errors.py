"""
Typed failures raised across the lookup and import paths.

Every error carries an ``ErrorKind`` so callers branch on the kind,
never on the message text.
"""
from enum import Enum
from typing import Iterable, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    LOOKUP_FAULT = "lookup_fault"
    STORAGE_FAILURE = "storage_failure"
    IMPORT_SHEET_MISSING = "import_sheet_missing"
    IMPORT_BATCH_FAILURE = "import_batch_failure"


INVALID_IATA_CODE = "Invalid IATA code provided"
AIRPORT_NOT_FOUND = "Airport not found"
INTERNAL_SERVER_ERROR = "Internal server error"


class AirportApiError(Exception):
    """Base for failures that map onto an HTTP response."""

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE
    status_code: int = 500
    message: str = INTERNAL_SERVER_ERROR

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail


class InvalidIataCodeError(AirportApiError):
    kind = ErrorKind.VALIDATION
    status_code = 400
    message = INVALID_IATA_CODE


class AirportNotFoundError(AirportApiError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    message = AIRPORT_NOT_FOUND

    @classmethod
    def from_fault(cls, fault: Exception) -> "AirportNotFoundError":
        """
        Collapse an unexpected lookup fault into a 404.
        The kind stays distinguishable for logging even though the response does not.
        """
        error = cls(f"Lookup fault: {fault!r}")
        error.kind = ErrorKind.LOOKUP_FAULT
        return error


class StorageFailureError(AirportApiError):
    kind = ErrorKind.STORAGE_FAILURE
    status_code = 500
    message = INTERNAL_SERVER_ERROR


class ReferenceImportError(Exception):
    """Base for failures raised while loading the reference workbook."""

    kind: ErrorKind = ErrorKind.IMPORT_BATCH_FAILURE


class ReferenceSheetMissingError(ReferenceImportError):
    kind = ErrorKind.IMPORT_SHEET_MISSING

    def __init__(self, missing_sheets: Iterable[str]):
        self.missing_sheets = list(missing_sheets)
        super().__init__(
            "One or more required sheets (airports, cities, countries) not found in the reference workbook: "
            + ", ".join(self.missing_sheets)
        )


class ReferenceBatchError(ReferenceImportError):
    kind = ErrorKind.IMPORT_BATCH_FAILURE

    def __init__(self, sheet_name: str, cause: Exception):
        self.sheet_name = sheet_name
        super().__init__(f"Upsert batch for '{sheet_name}' failed: {cause}")
