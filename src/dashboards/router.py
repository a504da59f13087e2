import logging

from fastapi import APIRouter

from src.auth.dependencies import StaffUserDep
from src.config import settings
from .models import DashboardEmbeds

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=DashboardEmbeds, summary="Rapports BI intégrés (personnel)")
async def read_dashboards(current_user: StaffUserDep):
    logger.info(f"API read_dashboards by {current_user.email}")
    return DashboardEmbeds(dashboard_url=settings.DASHBOARD_EMBED_URL, reports=dict(settings.REPORT_EMBED_URLS))

dashboard_router = router
