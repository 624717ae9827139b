"""
Logic layer: domain models and the package inventory engine.
"""
