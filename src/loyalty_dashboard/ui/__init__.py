from .error_banner import ErrorBanner
from .view_state import ViewState, ViewStateStatus, resolve_state

__all__ = ["ErrorBanner", "ViewState", "ViewStateStatus", "resolve_state"]
