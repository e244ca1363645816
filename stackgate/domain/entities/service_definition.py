"""
Service Definition Module

Architectural Intent:
- Read-only view of the service being deployed: its functions, their
  events, the compiled template and where artifacts are stored
- Acts as the compute-function registry (get_function / get_all_functions)
- Built once per check by the service loader; never mutated by the domain
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Optional

_NEWLINES_RE = re.compile(r"\r?\n")

DEFAULT_DEPLOYMENT_PREFIX = "serverless"


@dataclass(frozen=True)
class LogSubscription:
    """A cloudwatchLog event binding, numbered per function in declaration order."""
    log_group_name: str
    serial: int


@dataclass(frozen=True)
class FunctionDefinition:
    name: str
    physical_name: str
    events: tuple[dict[str, Any], ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Function name cannot be empty")
        if not self.physical_name:
            raise ValueError(f"Function {self.name} has no physical name")

    def log_subscriptions(self) -> list[LogSubscription]:
        subscriptions: list[LogSubscription] = []
        for event in self.events:
            binding = event.get("cloudwatchLog") if isinstance(event, dict) else None
            if not binding:
                continue

            if isinstance(binding, dict):
                log_group = binding.get("logGroup", "")
            else:
                log_group = binding

            subscriptions.append(
                LogSubscription(
                    log_group_name=_NEWLINES_RE.sub("", str(log_group)),
                    serial=len(subscriptions) + 1,
                )
            )
        return subscriptions


@dataclass(frozen=True)
class ServiceDefinition:
    service: str
    stage: str
    region: str
    deployment_bucket: str
    deployment_prefix: str = DEFAULT_DEPLOYMENT_PREFIX
    functions: dict[str, FunctionDefinition] = field(default_factory=dict)
    template: dict[str, Any] = field(default_factory=dict)
    artifact: Optional[str] = None
    service_path: str = "."

    def __post_init__(self) -> None:
        if not self.service:
            raise ValueError("Service name cannot be empty")
        if not self.stage:
            raise ValueError("Stage cannot be empty")
        if not self.deployment_bucket:
            raise ValueError("Deployment bucket cannot be empty")

    @property
    def artifact_prefix(self) -> str:
        return f"{self.deployment_prefix}/{self.service}/{self.stage}"

    def get_all_functions(self) -> list[str]:
        return list(self.functions)

    def get_function(self, name: str) -> FunctionDefinition:
        try:
            return self.functions[name]
        except KeyError:
            raise KeyError(f"Function {name!r} is not defined in service {self.service}")

    @staticmethod
    def default_physical_name(service: str, stage: str, function_name: str) -> str:
        return f"{service}-{stage}-{function_name}"
