"""
upower-notify — desktop notifications and hooks for UPower battery events.
"""

__version__ = "0.3.0"
