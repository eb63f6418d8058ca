from typing import Any, Dict, List, Optional


class MalformedDirectoryError(ValueError):
    """Raised when a directory payload has records of the wrong shape."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []
