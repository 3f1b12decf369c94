"""SourceText ORM model: resolvable text snapshots keyed by (type, id)."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from lexicompare.constants import SourceType
from lexicompare.models.base import Base


class SourceText(Base):
    __tablename__ = "source_texts"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True)
    source_type: Mapped[str] = mapped_column(String(50))
    source_id: Mapped[int] = mapped_column(Integer)
    matter_id: Mapped[int | None] = mapped_column(nullable=True)
    text: Mapped[str] = mapped_column(Text)
    citation: Mapped[str | None] = mapped_column(
        String(300), nullable=True
    )
    page_number: Mapped[int | None] = mapped_column(nullable=True)
    line_start: Mapped[int | None] = mapped_column(nullable=True)
    event_date: Mapped[str | None] = mapped_column(
        String(40), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint(
            "source_type", "source_id", name="uq_source_type_id"
        ),
    )

    @property
    def effective_citation(self) -> str | None:
        """Explicit citation, else one derived from page/line or date."""
        if self.citation:
            return self.citation
        if (
            self.source_type == SourceType.CITATION
            and self.page_number is not None
        ):
            line = self.line_start if self.line_start is not None else "?"
            return f"Page {self.page_number}, Line {line}"
        if (
            self.source_type == SourceType.TIMELINE_EVENT
            and self.event_date
        ):
            return f"Event on {self.event_date}"
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_type": self.source_type,
            "source_id": self.source_id,
            "matter_id": self.matter_id,
            "text": self.text,
            "citation": self.effective_citation,
            "page_number": self.page_number,
            "line_start": self.line_start,
            "event_date": self.event_date,
            "created_at": self.created_at.isoformat(),
        }
