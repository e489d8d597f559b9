from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_HOST = "https://ingest.loadimpact.com"
ENV_HOST = "K6CLOUD_HOST"
API_VERSION_PATH = "/v1"
DEFAULT_TIMEOUT_S = 10.0


def resolve_host(host: str | None, override: str | None = None, default: str = DEFAULT_HOST) -> str:
    if override:
        return override
    if host:
        return host
    return default


@dataclass(frozen=True)
class ClientConfig:
    token: str
    base_url: str
    client_version: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def create(
            cls,
            token: str,
            host: str | None,
            version: str,
            *,
            environ: Mapping[str, str] | None = None,
    ) -> "ClientConfig":
        env = os.environ if environ is None else environ
        resolved = resolve_host(host, override=env.get(ENV_HOST))
        return cls(
            token=token,
            base_url=f"{resolved}{API_VERSION_PATH}",
            client_version=version,
        )
