"""Report section configuration model."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from market_report.models.base import Base


class SectionConfig(Base):
    """Series codes shown in a report section.

    ``series_codes`` holds a JSON-encoded list of codes.
    """

    __tablename__ = "SectionConfig"

    section_name: Mapped[str] = mapped_column("SectionName", String(255), primary_key=True)
    series_codes: Mapped[str] = mapped_column("SeriesCodes", Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        "UpdatedAt", DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )
