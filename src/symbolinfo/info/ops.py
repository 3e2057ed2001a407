"""Info operations - info, eldoc and eldoc_query reply builders.

Each operation runs resolution then formatting to completion. ``handle``
is the op-name dispatcher used by transports: it never raises, turning
failures into error replies.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from symbolinfo.config.models import SymbolInfoConfig
from symbolinfo.core.errors import InternalError, RequestError, SymbolInfoError
from symbolinfo.core.logging import bind_request, clear_request
from symbolinfo.info.doclinks import DocLinkResolver, RemoteDocs
from symbolinfo.info.eldoc import eldoc
from symbolinfo.info.environment import Environment, PythonEnvironment
from symbolinfo.info.formatting import ResponseFormatter
from symbolinfo.info.models import InfoRequest
from symbolinfo.info.paths import PathResolver
from symbolinfo.info.query import ValueSource, eldoc_query
from symbolinfo.info.reflection import PythonReflector, Reflector
from symbolinfo.info.resolver import AlternateEnvironment, SymbolResolver
from symbolinfo.info.resources import ResourceLocator, SysPathResources
from symbolinfo.info.see_also import SeeAlsoIndex, bundled_index

log = structlog.get_logger(__name__)

NO_INFO = {"status": "no-info"}
NO_ELDOC = {"status": "no-eldoc"}


class InfoOps:
    """Symbol info operations for the info, eldoc and eldoc_query tools."""

    def __init__(
        self,
        resolver: SymbolResolver,
        formatter: ResponseFormatter,
        values: ValueSource,
        *,
        query_enabled: bool = False,
        remote_docs: RemoteDocs | None = None,
    ) -> None:
        self._resolver = resolver
        self._formatter = formatter
        self._values = values
        self._query_enabled = query_enabled
        self.remote_docs = remote_docs

    @classmethod
    def create(
        cls,
        config: SymbolInfoConfig,
        *,
        environment: Environment | None = None,
        reflector: Reflector | None = None,
        alternate: AlternateEnvironment | None = None,
        see_also: SeeAlsoIndex | None = None,
        resources: ResourceLocator | None = None,
    ) -> InfoOps:
        """Wire the default collaborators, overriding any that are passed in."""
        python_env = PythonEnvironment()
        resources = resources or SysPathResources(config.paths.search_path)
        paths = PathResolver(
            resources,
            placeholder_prefixes=config.paths.placeholder_prefixes,
            archive_extensions=config.paths.archive_extensions,
        )
        remote_docs = RemoteDocs.from_config(config.docs)
        resolver = SymbolResolver(
            environment or python_env,
            reflector or PythonReflector(),
            see_also if see_also is not None else bundled_index(),
            alternate=alternate,
            paths=paths,
            remap_build_temp_paths=config.paths.remap_build_temp_paths,
        )
        formatter = ResponseFormatter(paths, DocLinkResolver(config.docs, resources, remote_docs))
        values = environment if isinstance(environment, PythonEnvironment) else python_env
        return cls(
            resolver,
            formatter,
            values,
            query_enabled=config.query.enabled,
            remote_docs=remote_docs,
        )

    def info(self, request: InfoRequest) -> dict[str, Any]:
        info = self._formatter.normalize(self._resolver.resolve(request))
        if info is None:
            return dict(NO_INFO)
        log.info("info_resolved", **_summary(request))
        return info

    def eldoc(self, request: InfoRequest) -> dict[str, Any]:
        info = self._resolver.resolve(request)
        if info is None:
            return dict(NO_ELDOC)
        return eldoc(info)

    def register_doc_prefix(self, prefix: str, base_url: str) -> None:
        """Link docs of classes under ``prefix`` to ``base_url`` in later replies.

        Prefixes from ``docs.remote`` are registered when the ops are created.
        """
        if self.remote_docs is None:
            raise InternalError.unexpected("No remote documentation table is wired")
        self.remote_docs.register(prefix, base_url)

    def eldoc_query(self, ns: str, symbol: str) -> dict[str, Any]:
        """Inputs of the structured query ``symbol`` denotes (opt-in)."""
        if not self._query_enabled:
            raise RequestError.capability_disabled("eldoc_query", "query.enabled")
        return eldoc_query(self._values, ns, symbol)

    def handle(self, op: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Dispatch ``op`` and always return a reply."""
        handlers: dict[str, Callable[[Mapping[str, Any]], dict[str, Any]]] = {
            "info": lambda p: self.info(_request(p)),
            "eldoc": lambda p: self.eldoc(_request(p)),
            "eldoc-query": lambda p: self.eldoc_query(str(p.get("ns", "")), str(p.get("symbol", ""))),
        }
        handler = handlers.get(op)
        if handler is None:
            return {"status": "unknown-op", "op": op}
        bind_request(op=op)
        try:
            return handler(payload)
        except SymbolInfoError as e:
            log.warning("op_error", error_code=e.code.value, error=e.message)
            return {"status": "error", "op": op, "error": e.to_dict()}
        except Exception as e:
            log.error("op_internal_error", error=str(e))
            log.debug("op_internal_error_traceback", exc_info=True)
            return {"status": "error", "op": op, "error": InternalError.unexpected(str(e)).to_dict()}
        finally:
            clear_request()


def _request(payload: Mapping[str, Any]) -> InfoRequest:
    try:
        return InfoRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestError.invalid_request(reason=e.errors()[0]["msg"]) from e


def _summary(request: InfoRequest) -> dict[str, Any]:
    return {k: v for k, v in request.describe().items() if v is not None}
