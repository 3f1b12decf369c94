"""SQLAlchemy ORM models."""

from lexicompare.models.base import Base
from lexicompare.models.comparison import (
    Comparison,
    ComparisonConflict,
    ComparisonDifference,
)
from lexicompare.models.contract import (
    ClauseChangeRecord,
    ContractComparison,
    ContractVersion,
    VersionClause,
)
from lexicompare.models.source import SourceText

__all__ = [
    "Base",
    "ClauseChangeRecord",
    "Comparison",
    "ComparisonConflict",
    "ComparisonDifference",
    "ContractComparison",
    "ContractVersion",
    "SourceText",
    "VersionClause",
]
