"""
Custom widgets for page display and interaction.
"""
from .page_canvas import PageCanvas
from .thumbnail_list import ThumbnailList

__all__ = ['PageCanvas', 'ThumbnailList']
