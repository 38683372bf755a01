from .common import SDKError
from .config import Config

__all__ = ["SDKError", "Config"]
