from __future__ import annotations

import dataclasses
import json
import logging
import time
import types
import typing
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

import httpx

from .config_types import ClientConfig
from .errors import (
    DecodeError,
    ErrorResponse,
    NetworkError,
    NonStandardErrorResponse,
    NotAuthenticated,
    NotAuthorized,
    SerializationError,
)

logger = logging.getLogger(__name__)

PRODUCT_NAME = "k6cloud"

T = TypeVar("T")


def _json_default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if isinstance(obj, datetime):
        # naive values are taken as UTC so the offset is always present
        if obj.tzinfo is None:
            obj = obj.replace(tzinfo=timezone.utc)
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_body(data: Any) -> bytes:
    try:
        return json.dumps(data, default=_json_default, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to encode request body: {e}") from e


def _convert_field(hint: Any, value: Any) -> Any:
    if hint is None or value is None:
        return value
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) != 1:
            return value
        hint = args[0]
    if hint is datetime:
        if not isinstance(value, str):
            raise TypeError(f"expected RFC 3339 string, got {type(value).__name__}")
        return datetime.fromisoformat(value)
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return convert(hint, value)
    if typing.get_origin(hint) is list:
        args = typing.get_args(hint)
        if args and isinstance(args[0], type) and dataclasses.is_dataclass(args[0]):
            if not isinstance(value, list):
                raise TypeError(f"expected JSON array, got {type(value).__name__}")
            return [convert(args[0], item) for item in value]
    return value


def convert(into: type[T] | Callable[[Any], T], value: Any) -> T:
    """Turn a decoded JSON value into `into`.

    Dataclass targets are built from the matching keys of a JSON object (unknown
    keys are ignored), builtin container/scalar types are checked with
    isinstance, anything else is called with the decoded value.
    """
    if isinstance(into, type) and dataclasses.is_dataclass(into):
        if not isinstance(value, dict):
            raise TypeError(f"expected JSON object for {into.__name__}, got {type(value).__name__}")
        try:
            hints = typing.get_type_hints(into)
        except NameError:
            hints = {}
        kwargs = {}
        for f in dataclasses.fields(into):
            if f.init and f.name in value:
                kwargs[f.name] = _convert_field(hints.get(f.name), value[f.name])
        return into(**kwargs)
    if into in (int, float):
        # bool is an int subclass but never a JSON number
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected {into.__name__}, got {type(value).__name__}")
        if into is int and not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return into(value)
    if into in (dict, list, str, bool):
        if not isinstance(value, into):
            raise TypeError(f"expected {into.__name__}, got {type(value).__name__}")
        return value
    return into(value)


def parse_error_body(content: bytes) -> tuple[str, int]:
    """Extract (message, code) from a `{"error": {"message", "code"}}` body.

    Raises ValueError when the body is not JSON or deviates from that shape.
    """
    payload = json.loads(content)
    if payload is None:
        return "", 0
    if not isinstance(payload, dict):
        raise ValueError(f"expected JSON object, got {type(payload).__name__}")

    data = payload.get("error")
    if data is None:
        return "", 0
    if not isinstance(data, dict):
        raise ValueError(f"'error' must be an object, got {type(data).__name__}")

    message = data.get("message")
    if message is None:
        message = ""
    elif not isinstance(message, str):
        raise ValueError(f"'error.message' must be a string, got {type(message).__name__}")

    code = data.get("code")
    if code is None:
        code = 0
    elif isinstance(code, bool) or not isinstance(code, int):
        raise ValueError(f"'error.code' must be an integer, got {type(code).__name__}")

    return message, code


class _BodyGuard(httpx.SyncByteStream):
    """Response body wrapper used for the lifetime of one call.

    Iteration fails with a timeout once the call deadline has passed. Closing
    is a no-op; the wrapped stream is only closed by `release`, exactly once.
    """

    def __init__(self, stream: httpx.SyncByteStream, request: httpx.Request, deadline: float):
        self._stream = stream
        self._request = request
        self._deadline = deadline
        self._released = False

    def __iter__(self):
        for chunk in self._stream:
            if time.monotonic() > self._deadline:
                raise httpx.ReadTimeout("request exceeded its overall timeout", request=self._request)
            yield chunk

    def close(self) -> None:
        pass

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._stream.close()


def _read_body(response: httpx.Response) -> bytes:
    try:
        return response.read()
    except httpx.RequestError as e:
        raise NetworkError(str(e)) from e


def check_response(response: httpx.Response) -> None:
    status = response.status_code
    if 200 <= status <= 299:
        return

    if status == 401:
        raise NotAuthenticated(response)
    if status == 403:
        raise NotAuthorized(response)

    try:
        message, code = parse_error_body(_read_body(response))
    except ValueError as e:
        raise NonStandardErrorResponse(response, f"Non-standard API error response: {e}") from e
    raise ErrorResponse(response, message, code)


def _release(response: httpx.Response, body: _BodyGuard) -> None:
    response.close()
    try:
        body.release()
    except Exception as e:
        logger.error("failed to close response body: %s", e)


class Transport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._client = httpx.Client(
            base_url=cfg.base_url.rstrip("/"),
            timeout=httpx.Timeout(cfg.timeout_s),
            follow_redirects=True,
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def close(self) -> None:
        self._client.close()

    def build_request(self, method: str, url: str, data: Any | None = None) -> httpx.Request:
        content = encode_body(data) if data is not None else None
        return self._client.build_request(method, url, content=content)

    def _set_headers(self, request: httpx.Request) -> None:
        request.headers["Content-Type"] = "application/json"
        request.headers["Authorization"] = f"Token {self._cfg.token}"
        request.headers["User-Agent"] = f"{PRODUCT_NAME}/{self._cfg.client_version}"

    def execute(self, request: httpx.Request, into: type[T] | Callable[[Any], T] | None = None) -> T | None:
        self._set_headers(request)
        # timeout_s bounds the whole call, body included, not each phase
        deadline = time.monotonic() + self._cfg.timeout_s
        request.extensions["timeout"] = httpx.Timeout(self._cfg.timeout_s).as_dict()
        try:
            response = self._client.send(request, stream=True)
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e

        body = _BodyGuard(response.stream, request, deadline)
        response.stream = body
        try:
            if time.monotonic() > deadline:
                timeout = httpx.ReadTimeout("request exceeded its overall timeout", request=request)
                raise NetworkError(str(timeout)) from timeout

            check_response(response)
            if into is None:
                return None

            content = _read_body(response)
            # empty body on success is not an error
            if not content.strip():
                return None
            try:
                return convert(into, json.loads(content))
            except (TypeError, ValueError) as e:
                raise DecodeError(f"failed to decode response body: {e}") from e
        finally:
            _release(response, body)
