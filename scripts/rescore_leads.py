#!/usr/bin/env python3
"""
Lead Rescore Script

Recomputes and persists score, classification and explainability card for
stored leads as of now. The engagement factor decays with time since last
contact, so a periodic rescore keeps tiers current for leads whose attributes
have not changed.

Usage:
    python scripts/rescore_leads.py
    python scripts/rescore_leads.py --owner realtor-9
    python scripts/rescore_leads.py --classification Warm --dry-run
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import load_settings
from domain.lead import Lead, LeadClassification, LeadStatus
from domain.scoring import score_lead
from domain.time import utc_now
from repositories.document_store import DocumentStore, LeadFilter
from services.entrypoints import build_store
from services.scoring_service import score_and_persist

logger = logging.getLogger("rescore_leads")


def rescore_leads(
    store: DocumentStore,
    lead_filter: LeadFilter,
    dry_run: bool = False,
) -> List[tuple[Lead, Optional[LeadClassification], LeadClassification]]:
    """
    Rescore every lead matching `lead_filter`.

    Returns (lead, previous tier, new tier) for each lead processed. Failures
    are logged per lead and do not stop the batch.
    """

    as_of = utc_now()
    changes = []

    for lead in store.query_leads(lead_filter):
        try:
            if dry_run:
                result = score_lead(lead, as_of)
            else:
                result = score_and_persist(store, lead, as_of)
        except (LookupError, RuntimeError):
            logger.exception(f"Failed to rescore lead {lead.lead_id}", extra={"lead_id": lead.lead_id})
            continue
        changes.append((lead, lead.classification, result.classification))

    return changes


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(
        description="Rescore stored leads as of now",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Rescore all active leads
  python scripts/rescore_leads.py

  # Rescore one realtor's leads
  python scripts/rescore_leads.py --owner realtor-9

  # Preview tier changes for Warm leads without writing
  python scripts/rescore_leads.py --classification Warm --dry-run
        """
    )
    parser.add_argument(
        "--owner",
        help="Only rescore leads owned by this realtor",
    )
    parser.add_argument(
        "--classification",
        choices=[tier.value for tier in LeadClassification],
        help="Only rescore leads currently in this tier",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute scores without persisting them",
    )
    args = parser.parse_args(argv)

    lead_filter = LeadFilter(
        classification=LeadClassification(args.classification) if args.classification else None,
        status=LeadStatus.ACTIVE,
        owner_id=args.owner,
    )

    try:
        store = build_store(load_settings())
        changes = rescore_leads(store, lead_filter, dry_run=args.dry_run)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    moved = [(lead, before, after) for lead, before, after in changes if before != after]
    print(f"Rescored {len(changes)} leads ({len(moved)} changed tier)")
    for lead, before, after in moved:
        previous = before.value if before else "unscored"
        print(f"  {lead.lead_id}: {previous} -> {after.value}")

    if args.dry_run:
        print("Dry run: nothing was written")
    return 0


if __name__ == "__main__":
    sys.exit(main())
