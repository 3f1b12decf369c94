"""Domain errors raised by the comparison engine and services.

Each error carries the HTTP status the API layer reports it with.
"""

from __future__ import annotations


class ComparisonError(Exception):
    """Base class for all lexicompare domain errors."""

    status_code: int = 400


class InvalidInput(ComparisonError, TypeError):
    """Non-string or null text handed to an engine primitive."""

    status_code = 422


class SourceNotFound(ComparisonError):
    """A source descriptor did not resolve to any text."""

    status_code = 404

    def __init__(self, source_type: str, source_id: int) -> None:
        super().__init__(
            f"Source not found: {source_type}#{source_id}"
        )
        self.source_type = source_type
        self.source_id = source_id


class ComparisonNotFound(ComparisonError):
    status_code = 404

    def __init__(self, comparison_id: str) -> None:
        super().__init__(f"Comparison not found: {comparison_id}")
        self.comparison_id = comparison_id


class ConflictNotFound(ComparisonError):
    status_code = 404

    def __init__(self, comparison_id: str, index: int) -> None:
        super().__init__(
            f"Conflict {index} not found in comparison {comparison_id}"
        )
        self.comparison_id = comparison_id
        self.index = index


class AlreadyResolved(ComparisonError):
    """Resolution attempted on a conflict that is already resolved."""

    status_code = 409


class VersionNotFound(ComparisonError):
    status_code = 404

    def __init__(self, version_id: str) -> None:
        super().__init__(f"Contract version not found: {version_id}")
        self.version_id = version_id


class AlreadyReviewed(ComparisonError):
    """Review attempted on a clause change with a final decision."""

    status_code = 409


class ComparisonTimeout(ComparisonError, TimeoutError):
    """Comparison did not finish within the configured deadline."""

    status_code = 504


class ChangeNotFound(ComparisonError):
    status_code = 404

    def __init__(self, comparison_id: str, ordinal: int) -> None:
        super().__init__(
            f"Change {ordinal} not found in comparison {comparison_id}"
        )
        self.comparison_id = comparison_id
        self.ordinal = ordinal
