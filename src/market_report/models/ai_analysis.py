"""AI-generated weekly analysis models."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from market_report.models.base import Base


class Folder(Base):
    """Grouping of analyses (e.g. one folder per report series)."""

    __tablename__ = "Folders"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    analyses: Mapped[list["PdfAnalysis"]] = relationship("PdfAnalysis", back_populates="folder")


class PdfAnalysis(Base):
    """Analysis text for one report week, split by asset class."""

    __tablename__ = "PdfAnalysis"

    id: Mapped[int] = mapped_column("ID", primary_key=True, autoincrement=True)
    folder_id: Mapped[int | None] = mapped_column(
        "FOLDER_ID", ForeignKey("Folders.id"), nullable=True, index=True
    )
    macro_us: Mapped[str | None] = mapped_column("MACRO_US", Text, nullable=True)
    equities: Mapped[str | None] = mapped_column("EQUITIES", Text, nullable=True)
    fixed_income: Mapped[str | None] = mapped_column("FIXED_INCOME", Text, nullable=True)
    other_assets: Mapped[str | None] = mapped_column("OTHER_ASSETS", Text, nullable=True)
    start_date: Mapped[date | None] = mapped_column("START_DATE", Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column("END_DATE", Date, nullable=True)
    created_at: Mapped[datetime | None] = mapped_column("CREATED_AT", DateTime, nullable=True)

    # Relationships
    folder: Mapped["Folder | None"] = relationship("Folder", back_populates="analyses")
