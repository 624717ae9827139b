"""
Shared infrastructure utilities.
"""
