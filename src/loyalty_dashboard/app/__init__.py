from .bootstrap import BootstrapResult, DashboardBootstrap
from .state import AppState, Route, SessionContext

__all__ = ["AppState", "BootstrapResult", "DashboardBootstrap", "Route", "SessionContext"]
