"""Series master and observation models."""

import datetime
from decimal import Decimal

from sqlalchemy import Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from market_report.models.base import Base


class FinMaster(Base):
    """One row per series code with its display label and data source."""

    __tablename__ = "FinMaster"

    code: Mapped[str] = mapped_column("APICode", String(100), primary_key=True)
    description: Mapped[str | None] = mapped_column("Description", String(500), nullable=True)
    source: Mapped[str | None] = mapped_column("SOURCE", String(100), nullable=True)


class FinData(Base):
    """A single dated observation of a series."""

    __tablename__ = "FinData"

    code: Mapped[str] = mapped_column("API_CODE", String(100), primary_key=True, index=True)
    date: Mapped[datetime.date] = mapped_column("DATE", Date, primary_key=True)
    value: Mapped[Decimal | None] = mapped_column("VALUE", Numeric(20, 6), nullable=True)
