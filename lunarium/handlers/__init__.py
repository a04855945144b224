"""
Lambda handlers package for AWS Lambda functions.
"""
from .config import handler as config_handler
from .day import handler as day_handler
from .wheel import handler as wheel_handler

__all__ = ["config_handler", "day_handler", "wheel_handler"]
