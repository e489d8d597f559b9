from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class TestRun:
    name: str
    thresholds: dict[str, list[str]] = field(default_factory=dict)
    duration: int = 0
    project_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": self.name,
            "thresholds": self.thresholds,
            "duration": self.duration,
        }
        if self.project_id:
            body["project_id"] = self.project_id
        return body


@dataclass
class CreateTestRunResponse:
    reference_id: str = ""


@dataclass
class SampleData:
    time: datetime
    value: float
    tags: dict[str, str] = field(default_factory=dict)


@dataclass
class Sample:
    metric: str
    data: SampleData
    type: str = "Point"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "metric": self.metric, "data": self.data}
