"""
flipfour.ai - Computer opponent for FlipFour
"""

__all__ = ['HeuristicPlayer']

from flipfour.ai.heuristic import HeuristicPlayer
