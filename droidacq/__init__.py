"""
droidacq - Android forensic acquisition helper.

Drives adb to collect environment, services and package inventory
from a connected device into a case folder.
"""

__version__ = "0.1.0"
