from __future__ import annotations

from typing import Any, Callable, Mapping, TypeVar

import httpx

from .config_types import ClientConfig
from .errors import CloudClientError
from .models import CreateTestRunResponse, Sample, TestRun
from .transport import Transport

T = TypeVar("T")


class CloudClient:
    """Client for the Load Impact cloud ingestion API."""

    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._t = Transport(cfg, transport=transport)

    def __enter__(self) -> "CloudClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def base_url(self) -> str:
        return self._t.config.base_url

    def close(self) -> None:
        self._t.close()

    def new_request(self, method: str, url: str, data: Any | None = None) -> httpx.Request:
        return self._t.build_request(method, url, data)

    def do(self, request: httpx.Request, into: type[T] | Callable[[Any], T] | None = None) -> T | None:
        return self._t.execute(request, into)

    # --- API methods ---
    def create_test_run(self, test_run: TestRun) -> CreateTestRunResponse:
        req = self.new_request("POST", f"{self.base_url}/tests", test_run)
        resp = self.do(req, CreateTestRunResponse)
        if resp is None or not resp.reference_id:
            raise CloudClientError("Failed to get a reference ID")
        return resp

    def push_metric(self, reference_id: str, samples: list[Sample]) -> None:
        req = self.new_request("POST", f"{self.base_url}/metrics/{reference_id}", samples)
        self.do(req)

    def test_finished(self, reference_id: str, thresholds: Mapping[str, Mapping[str, bool]], tainted: bool) -> None:
        body = {
            "result_status": 1 if tainted else 0,
            "thresholds": dict(thresholds),
        }
        req = self.new_request("POST", f"{self.base_url}/tests/{reference_id}", body)
        self.do(req)


def new_client(
        token: str,
        host: str | None = "",
        version: str = "",
        *,
        environ: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
) -> CloudClient:
    cfg = ClientConfig.create(token, host, version, environ=environ)
    return CloudClient(cfg, transport=transport)
