"""Event ticketing service package.

Holds the registration lifecycle, check-in protocol and notification
fan-out used by the HTTP API exposed from ``main.py``.
"""
