"""
Data collectors package.

This package contains the acquisition modules run against a device.
"""

from .base_collector import BaseCollector, CollectionResult, CollectionError, CollectionConfig, DataSource
from .collector_registry import CollectorRegistry, create_default_registry
from .command_collectors import CommandOutputCollector, EnvironmentCollector, ServicesCollector
from .packages_collector import PackagesCollector

__all__ = [
    'BaseCollector',
    'CollectionResult',
    'CollectionError',
    'CollectionConfig',
    'DataSource',
    'CollectorRegistry',
    'create_default_registry',
    'CommandOutputCollector',
    'EnvironmentCollector',
    'ServicesCollector',
    'PackagesCollector'
]
