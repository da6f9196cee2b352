# ABOUTME: Host plugin protocol: message models and the JSON-RPC loop over stdin/stdout.
# ABOUTME: One request per line in, one response per line out; stdout carries nothing else.

import asyncio
import json
import logging
import sys
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


class Span(BaseModel):
    start: int = 0
    end: int = 0


class Tag(BaseModel):
    span: Span = Span()
    anchor: str | None = None


class EvaluatedArgs(BaseModel):
    """Arguments of the invocation as evaluated by the host."""

    positional: list[Any] | None = None
    named: dict[str, Any] | None = None

    def get(self, name: str, default: Any = None) -> Any:
        if not self.named:
            return default
        return self.named.get(name, default)


class CallInfo(BaseModel):
    args: EvaluatedArgs = EvaluatedArgs()
    name_tag: Tag = Tag()


class NamedParam(BaseModel):
    kind: Literal["optional", "switch"]
    shape: str = "any"
    desc: str
    short: str | None = None


class Signature(BaseModel):
    """What the host needs to register the command."""

    name: str
    usage: str
    named: dict[str, NamedParam] = {}
    is_filter: bool = False


class LabeledError(BaseModel):
    """Error as shown by the host: a message plus a label under a span."""

    message: str
    label: str
    span: Span = Span()


class AutoConvert(BaseModel):
    """Value the host should parse from `format` text into its own value type."""

    value: str
    format: str = "json"


class ReturnValue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: AutoConvert | None = Field(None, alias="Ok")
    err: LabeledError | None = Field(None, alias="Err")

    @classmethod
    def success(cls, value: AutoConvert) -> "ReturnValue":
        return cls(ok=value)

    @classmethod
    def failure(cls, error: LabeledError) -> "ReturnValue":
        return cls(err=error)

    def dump(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Request(BaseModel):
    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: Any = None


class Plugin(Protocol):
    """Capabilities the host calls on a filter plugin."""

    def config(self) -> Signature: ...

    async def begin_filter(self, call_info: CallInfo) -> list[ReturnValue]: ...

    async def filter(self, value: Any) -> list[ReturnValue]: ...

    async def end_filter(self) -> list[ReturnValue]: ...


def response(params: Any) -> dict:
    return {"jsonrpc": JSONRPC_VERSION, "method": "response", "params": params}


def ok(value: Any) -> dict:
    return response({"Ok": value})


def err(error: LabeledError) -> dict:
    return response({"Err": error.model_dump()})


async def dispatch(plugin: Plugin, request: Request) -> dict:
    """Route one request to the plugin and build the response message."""
    if request.method == "config":
        return ok(plugin.config().model_dump())
    if request.method == "begin_filter":
        try:
            call_info = CallInfo.model_validate(request.params or {})
        except ValidationError as e:
            return err(LabeledError(message=f"Invalid call info: {e}", label="call"))
        values = await plugin.begin_filter(call_info)
    elif request.method == "filter":
        values = await plugin.filter(request.params)
    elif request.method == "end_filter":
        values = await plugin.end_filter()
    else:
        return err(LabeledError(message=f"Unknown method '{request.method}'", label="method"))
    return ok([value.dump() for value in values])


def write_message(stream, message: dict) -> None:
    stream.write(json.dumps(message, ensure_ascii=False) + "\n")
    stream.flush()


async def serve_plugin(plugin: Plugin, stdin=None, stdout=None) -> None:
    """Answer host requests until `quit` or end of input."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    while True:
        line = await asyncio.to_thread(stdin.readline)
        if not line:
            break
        line = line.strip()
        if not line:
            continue

        try:
            request = Request.model_validate_json(line)
        except ValidationError as e:
            logger.warning("Unparseable request: %s", line)
            write_message(stdout, err(LabeledError(message=f"Invalid request: {e}", label="request")))
            continue

        if request.method == "quit":
            break

        logger.debug("Handling %s", request.method)
        try:
            message = await dispatch(plugin, request)
        except Exception:
            # Keep serving; the host sees an error for this request only
            logger.exception("Plugin failed handling %s", request.method)
            message = err(LabeledError(message="Internal plugin error", label=request.method))
        write_message(stdout, message)
