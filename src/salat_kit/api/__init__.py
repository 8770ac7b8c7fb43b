"""Web API layer."""

from salat_kit.api.app import create_app
from salat_kit.api.dependencies import get_app_state

__all__ = ["create_app", "get_app_state"]
