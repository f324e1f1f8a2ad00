"""
Analytics Router
API endpoint for the advanced business-health report.
"""

import logging

from fastapi import APIRouter, Depends, Query

from bizpulse.analytics.data_access import SQLAlchemyDataSource
from bizpulse.analytics.exceptions import DataFetchError
from bizpulse.analytics.schemas import AdvancedAnalyticsResponse
from bizpulse.analytics.service import AnalyticsService
from bizpulse.config import settings
from bizpulse.core.errors import ErrorCode, create_error_response, sanitize_error_message
from bizpulse.database import async_session_factory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


def get_analytics_service() -> AnalyticsService:
    """Dependency providing an AnalyticsService backed by the database."""
    data_source = SQLAlchemyDataSource(
        async_session_factory,
        timeout_seconds=settings.analytics_fetch_timeout_seconds,
    )
    return AnalyticsService(data_source, window_months=settings.analytics_window_months)


@router.get(
    "/advanced",
    response_model=AdvancedAnalyticsResponse,
    summary="Get advanced business analytics",
    description=(
        "Calculate revenue, inventory and cash flow insights, the business "
        "health score and action recommendations for a tenant."
    ),
)
async def get_advanced_analytics(
    tenant_id: str = Query(..., min_length=1, description="Tenant to analyze"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> AdvancedAnalyticsResponse:
    """
    Generate the advanced analytics report.

    Computed on demand from the tenant's current records; nothing is cached.
    A failure to load any record collection fails the whole request.
    """
    try:
        report = await service.generate_advanced_analytics(tenant_id)
    except DataFetchError as e:
        message = sanitize_error_message(e, ErrorCode.DATA_FETCH_FAILED)
        raise create_error_response(ErrorCode.DATA_FETCH_FAILED, message)

    return AdvancedAnalyticsResponse.model_validate(report)
