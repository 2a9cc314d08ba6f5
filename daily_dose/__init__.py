"""
daily-dose: a show of the day from the Internet Archive live music collections.
"""

__version__ = "0.1.0"
