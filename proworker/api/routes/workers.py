"""
Worker context API routes.
"""
from fastapi import APIRouter, Depends

from proworker.analytics.snapshot import WorkerContext
from proworker.api.dependencies import get_aggregation_service
from proworker.api.middleware.error_handler import NotFoundException
from proworker.services.aggregation_service import AggregationService, WorkerNotFoundError


WORKER_UNAVAILABLE = "Worker profile unavailable"

router = APIRouter(prefix="/api/workers", tags=["workers"])


@router.get("/{worker_id}/context", response_model=WorkerContext)
def get_worker_context(
    worker_id: int,
    service: AggregationService = Depends(get_aggregation_service),
) -> WorkerContext:
    """
    Build the full analytics snapshot for one worker.

    Returns:
        WorkerContext: profile, orders, schedules, reviews, training,
        monthly history and peer analytics

    Raises:
        404: Worker does not exist
    """
    try:
        return service.build_context(worker_id)
    except WorkerNotFoundError:
        raise NotFoundException(WORKER_UNAVAILABLE, details={"worker_id": worker_id})
