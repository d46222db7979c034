"""Application ports - interfaces for external adapters."""

from wardgate.application.ports.clock import Clock
from wardgate.application.ports.dependency_resolver import DependencyResolver
from wardgate.application.ports.ip_guard import IpGuard
from wardgate.application.ports.permission_evaluator import PermissionEvaluator
from wardgate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Clock",
    "DependencyResolver",
    "IpGuard",
    "PermissionEvaluator",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
