"""streamreq: single-request streaming HTTP controller for asyncio applications.

Public API:
    RequestController - Issues one GET/POST at a time and exposes its lifecycle
    RequestState - Lifecycle phases observed through RequestController.state

Internal (not for direct use):
    _internal.transport - httpx-backed transport and network error codes
    _internal.signals - Observer lists used for change notifications
"""

from streamreq._version import __version__
from streamreq.controller import RequestController
from streamreq.models import ControllerConfig, RequestDescriptor, RequestState

__all__ = [
    "__version__",
    "RequestController",
    "RequestState",
    "RequestDescriptor",
    "ControllerConfig",
]
