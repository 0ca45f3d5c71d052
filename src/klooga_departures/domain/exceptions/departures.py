class DeparturesError(Exception):
    """Base exception for departure lookup failures."""


class MissingApiKey(DeparturesError):
    """Raised before any upstream call when the Transitland key is not configured."""


class MissingStationParameter(DeparturesError, ValueError):
    """Raised when the origin or destination identifier is missing."""


class StationNotFound(DeparturesError):
    """Raised when a placeholder station cannot be resolved to a Onestop ID."""


class UpstreamError(DeparturesError):
    """Raised when the schedule API answers with a non-success status."""

    def __init__(self, status_code: int, text: str = "") -> None:
        super().__init__(f"Transitland responded with {status_code}")
        self.status_code = status_code
        self.text = text
