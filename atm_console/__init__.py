"""
ATM Console

A single-session command-line bank account simulator with PIN
authentication, Decimal money handling and a timestamped transaction log.
"""

__version__ = "1.0.0"
