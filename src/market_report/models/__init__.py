"""SQLAlchemy models for the market report backend."""

from market_report.models.ai_analysis import Folder, PdfAnalysis
from market_report.models.base import Base
from market_report.models.section_config import SectionConfig
from market_report.models.series import FinData, FinMaster

__all__ = [
    "Base",
    "FinMaster",
    "FinData",
    "SectionConfig",
    "Folder",
    "PdfAnalysis",
]
