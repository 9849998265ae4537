from datetime import datetime
from typing import Literal

from pydantic import BaseModel

DependencyStatus = Literal["ok", "error"]


class HealthResponse(BaseModel):
    status: Literal["ok"]
    timestamp: datetime


class ReadinessDependency(BaseModel):
    name: Literal["database"]
    status: DependencyStatus


class ReadinessResponse(BaseModel):
    status: Literal["ok", "degraded"]
    dependencies: list[ReadinessDependency]

    @classmethod
    def from_dependencies(cls, dependencies: list[ReadinessDependency]) -> "ReadinessResponse":
        healthy = all(dependency.status == "ok" for dependency in dependencies)
        return cls(status="ok" if healthy else "degraded", dependencies=dependencies)

    @property
    def is_ready(self) -> bool:
        return self.status == "ok"
