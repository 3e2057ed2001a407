"""Symbol info: resolution, formatting and eldoc hints."""

from symbolinfo.info.doclinks import DocLinkResolver, RemoteDocs
from symbolinfo.info.environment import Environment, PythonEnvironment
from symbolinfo.info.formatting import ResponseFormatter
from symbolinfo.info.models import InfoMap, InfoRequest
from symbolinfo.info.ops import InfoOps
from symbolinfo.info.paths import PathResolver
from symbolinfo.info.reflection import PythonReflector, Reflector
from symbolinfo.info.resolver import AlternateEnvironment, SymbolResolver
from symbolinfo.info.resources import ResourceLocator, SysPathResources
from symbolinfo.info.see_also import SeeAlsoIndex

__all__ = [
    "AlternateEnvironment",
    "DocLinkResolver",
    "Environment",
    "InfoMap",
    "InfoOps",
    "InfoRequest",
    "PathResolver",
    "PythonEnvironment",
    "PythonReflector",
    "Reflector",
    "RemoteDocs",
    "ResourceLocator",
    "ResponseFormatter",
    "SeeAlsoIndex",
    "SymbolResolver",
    "SysPathResources",
]
