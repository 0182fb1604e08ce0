"""
API dependencies for FastAPI dependency injection.

Provides the database session, the aggregation service bound to it and the
process-wide chat gateway.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from proworker.lib.db import get_db as get_db_session
from proworker.services.aggregation_service import AggregationService
from proworker.services.chat_gateway import ChatGateway, get_chat_gateway as get_gateway_instance
from proworker.services.worker_repository import SqlWorkerDataRepository


# Re-export get_db for convenience
get_db = get_db_session


def get_aggregation_service(db: Session = Depends(get_db)) -> AggregationService:
    """Aggregation service reading through a request-scoped session."""
    return AggregationService(SqlWorkerDataRepository(db))


def get_chat_gateway() -> ChatGateway:
    return get_gateway_instance()
