"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from stackgate.domain.ports.object_store_port import ObjectStorePort, ObjectHead
from stackgate.domain.ports.function_inspector_port import FunctionInspectorPort
from stackgate.domain.ports.log_subscription_port import LogSubscriptionPort
from stackgate.domain.ports.account_port import AccountPort, AccountInfo
from stackgate.domain.ports.naming_port import NamingPort
from stackgate.domain.ports.event_bus_port import EventBusPort

__all__ = [
    "ObjectStorePort",
    "ObjectHead",
    "FunctionInspectorPort",
    "LogSubscriptionPort",
    "AccountPort",
    "AccountInfo",
    "NamingPort",
    "EventBusPort",
]
