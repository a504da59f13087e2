from typing import Dict, Optional

from sqlmodel import SQLModel


class DashboardEmbeds(SQLModel):
    """Adresses des rapports BI intégrés dans l'interface d'administration."""
    dashboard_url: Optional[str] = None
    reports: Dict[str, str] = {}
