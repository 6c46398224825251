"""
サービスモジュール
"""

from .validation_service import validation_service, get_pipeline

__all__ = ["validation_service", "get_pipeline"]
