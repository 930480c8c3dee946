"""
Cadence API Endpoints.

HTTP trigger for the cadence scheduler, for scheduling platforms that call a
URL on a fixed interval instead of running scripts/run_cadence.py.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_scheduler
from api.models import CadenceRunResponse
from services.cadence_scheduler import CadenceScheduler

router = APIRouter()


@router.post(
    "/cadence/run",
    response_model=CadenceRunResponse,
    summary="Run Cadence",
    description="Run one cadence batch and return its summary."
)
def run_cadence_batch(scheduler: CadenceScheduler = Depends(get_scheduler)):
    """
    Run one cadence batch.

    Per-lead failures never fail the request; they are reported in the
    summary counters (`failed`, `errors`, `timed_out`).
    """
    summary = scheduler.run()
    return CadenceRunResponse(**summary.as_dict())
