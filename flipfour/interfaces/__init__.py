"""
flipfour.interfaces - Terminal interface for FlipFour
"""

# Don't import anything here to avoid circular imports
__all__ = []
