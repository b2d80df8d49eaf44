"""
Tip of the Day: daily LLM-generated tips delivered by email and SMS.
"""

__version__ = "1.0.0"
