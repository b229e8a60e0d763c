"""
Horizon API - project records and message-signing service.
"""

__version__ = "1.0.0"
