"""Public models for streamreq."""

from streamreq.models.request import ControllerConfig, RequestDescriptor, RequestState

__all__ = ["ControllerConfig", "RequestDescriptor", "RequestState"]
