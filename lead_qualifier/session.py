"""
Batch session state: the active offer, the uploaded leads and the latest
scoring results. Each slot is replaced wholesale on write (last writer
wins); nothing outlives the process.
"""

import logging
from typing import List, Optional

from .models.schemas import Lead, Offer, ScoredLead

logger = logging.getLogger(__name__)


class MissingPreconditionError(Exception):
    """A request needs session state that has not been provided yet"""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ScoringSession:
    """Holder for one user's offer, leads and results"""

    def __init__(self):
        self.offer: Optional[Offer] = None
        self.leads: List[Lead] = []
        self.results: List[ScoredLead] = []

    def set_offer(self, offer: Offer):
        self.offer = offer
        logger.info(f"Offer set: {offer.name}")

    def set_leads(self, leads: List[Lead]):
        """Replace the current batch; results from the previous batch are dropped"""
        self.leads = list(leads)
        self.results = []
        logger.info(f"Stored {len(self.leads)} leads")

    def set_results(self, results: List[ScoredLead]):
        self.results = list(results)

    def require_offer(self, status_code: int = 400) -> Offer:
        if self.offer is None:
            raise MissingPreconditionError(
                "No offer found. Please create an offer first.", status_code
            )
        return self.offer

    def require_leads(self) -> List[Lead]:
        if not self.leads:
            raise MissingPreconditionError("No leads uploaded. Please upload leads first.")
        return self.leads

    def require_results(self) -> List[ScoredLead]:
        if not self.results:
            raise MissingPreconditionError(
                "No scored leads available. Please score leads first.", status_code=404
            )
        return self.results

    def clear(self):
        self.offer = None
        self.leads = []
        self.results = []
