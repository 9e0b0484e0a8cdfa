"""Exception types raised across DiffSift"""

from typing import Any, List, Optional


class DiffSiftError(Exception):
    """Base class for DiffSift failures"""


class ConfigurationError(DiffSiftError):
    """One or more required inputs are missing"""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required inputs: {', '.join(self.missing)}")


class ContextError(DiffSiftError):
    """The run was not triggered by a pull request event"""


class UpstreamServiceError(DiffSiftError):
    """The generation service answered with an error status"""

    def __init__(self, status_code: int, body: Any, response: Optional[Any] = None):
        self.status_code = status_code
        self.body = body
        self.response = response
        super().__init__(f"Generation service returned HTTP {status_code}")
