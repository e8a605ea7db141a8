"""Service layer for report section configuration."""

import json
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from market_report.models.section_config import SectionConfig

logger = logging.getLogger(__name__)

FIXED_INCOME_SECTION = "Fixed Income"

DEFAULT_SECTION_CONFIG: dict[str, list[str]] = {
    "Equities": ["SP500", "IJR", "EFA", "VIXCLS"],
    FIXED_INCOME_SECTION: ["DGS2", "DGS5", "DGS10", "DGS30", "BAMLH0A0HYM2", "BAMLC0A0CM"],
    "Economic Data": ["CPIAUCSL", "UNRATE", "PAYEMS", "GDP"],
}


def required_series_count(section_name: str) -> int:
    """Number of charts a section lays out."""
    return 6 if section_name == FIXED_INCOME_SECTION else 4


def default_section_config() -> dict[str, list[str]]:
    return {section: list(codes) for section, codes in DEFAULT_SECTION_CONFIG.items()}


async def get_section_config(db: AsyncSession) -> tuple[dict[str, list[str]], str]:
    """Get series codes per section.

    Stored sections override the defaults; sections never stored keep their
    default codes. Falls back to the defaults entirely when the table cannot
    be read.

    Returns:
        Tuple of (config, source) where source is "database" or "default"
    """
    try:
        result = await db.execute(select(SectionConfig))
        stored = list(result.scalars().all())
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning(f"Section config unavailable, using defaults: {e}")
        return default_section_config(), "default"

    if not stored:
        return default_section_config(), "default"

    config: dict[str, list[str]] = {}
    for row in stored:
        try:
            codes = json.loads(row.series_codes) if row.series_codes else []
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed series codes for section %s", row.section_name)
            continue
        config[row.section_name] = [str(code) for code in codes]

    for section, codes in DEFAULT_SECTION_CONFIG.items():
        config.setdefault(section, list(codes))

    return config, "database"


async def update_section_config(
    db: AsyncSession, section_name: str, series_codes: list[str]
) -> SectionConfig:
    """Replace the series codes of one section.

    Raises:
        ValueError: if the section name is blank or the code count does not
            match the section's layout
    """
    section_name = section_name.strip()
    codes = [code.strip() for code in series_codes]
    required = required_series_count(section_name)

    if not section_name or len(codes) != required or not all(codes):
        raise ValueError(f"sectionName and seriesCodes (exactly {required}) are required")

    result = await db.execute(
        select(SectionConfig).where(SectionConfig.section_name == section_name)
    )
    config = result.scalar_one_or_none()

    if config:
        config.series_codes = json.dumps(codes)
        config.updated_at = datetime.now(timezone.utc)
    else:
        config = SectionConfig(
            section_name=section_name,
            series_codes=json.dumps(codes),
            updated_at=datetime.now(timezone.utc),
        )
        db.add(config)

    await db.commit()
    await db.refresh(config)
    logger.info("Updated section %s: %s", section_name, ",".join(codes))
    return config
