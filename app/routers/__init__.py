# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - root.py: Greeting and ping endpoints
# - notifications.py: Notification provider diagnostics
# - files.py: Upload validation and allowed MIME types
#
# Each router is mounted in main.py under the API base path.
# =============================================================================

from . import files
from . import notifications
from . import root

__all__ = [
    "files",
    "notifications",
    "root",
]
