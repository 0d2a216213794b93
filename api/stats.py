from fastapi import APIRouter, Depends

from api.dependencies import get_stats_service, require_viewer
from schemas.common import success_response
from services.stats_service import StatsService

router = APIRouter(prefix="/stats", tags=["stats"], dependencies=[Depends(require_viewer)])


@router.get("")
def get_stats(stats: StatsService = Depends(get_stats_service)):
    """Shipment counts by status plus directory totals."""
    return success_response(stats.get_counts())
