"""
Caption tool operations.
"""

from ytcaptions.operations.service import CaptionService

__all__ = ["CaptionService"]
