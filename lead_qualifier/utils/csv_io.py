"""
CSV ingestion of leads and export of scored results.
"""

import io
import logging
from typing import List

import pandas as pd

from ..models.schemas import Lead, ScoredLead
from ..config.settings import REQUIRED_LEAD_COLUMNS, EXPORT_COLUMNS

logger = logging.getLogger(__name__)


class LeadIngestionError(Exception):
    """The uploaded file cannot be turned into leads"""


def parse_leads_csv(content: bytes) -> List[Lead]:
    """
    Parse CSV bytes into leads.

    Header names are matched case-insensitively. Rows with an empty name
    are dropped; all other fields may be blank. Fields beyond the header
    (an unquoted comma in the last column) are discarded rather than
    shifting the row.

    Raises:
        LeadIngestionError: unreadable file or missing required columns
    """
    try:
        # index_col=False keeps pandas from promoting the first column to an index
        df = pd.read_csv(io.BytesIO(content), dtype=str, keep_default_na=False, index_col=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise LeadIngestionError(f"Failed to parse CSV file: {e}") from e

    # Short rows still come back as NaN
    df = df.fillna("")
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_LEAD_COLUMNS if c not in df.columns]
    if missing:
        raise LeadIngestionError(f"Missing required columns: {', '.join(missing)}")

    leads = []
    for row in df[REQUIRED_LEAD_COLUMNS].itertuples(index=False):
        values = {col: (value or "").strip() for col, value in zip(REQUIRED_LEAD_COLUMNS, row)}
        if values["name"]:
            leads.append(Lead(**values))

    logger.info(f"Parsed {len(leads)} leads from CSV")
    return leads


def export_scored_leads_csv(results: List[ScoredLead]) -> str:
    """Serialize scored leads to CSV text in canonical column order"""
    fields = [field for field, _ in EXPORT_COLUMNS]
    rows = [r.model_dump(mode="json", include=set(fields)) for r in results]

    df = pd.DataFrame(rows, columns=fields)
    df.columns = [title for _, title in EXPORT_COLUMNS]

    stream = io.StringIO()
    df.to_csv(stream, index=False)
    logger.info(f"Exported {len(results)} scored leads")
    return stream.getvalue()
