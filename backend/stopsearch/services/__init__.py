"""Services for data collection and dashboard state."""

from stopsearch.services.collector import ThrottledCollector
from stopsearch.services.dashboard import Dashboard, RefreshInProgress
from stopsearch.services.police_client import PoliceAPIClient

__all__ = ["Dashboard", "PoliceAPIClient", "RefreshInProgress", "ThrottledCollector"]
