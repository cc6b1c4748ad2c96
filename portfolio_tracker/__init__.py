"""
Investment Portfolio Tracker
Holdings storage and portfolio analytics
"""

__version__ = "1.0.0"
