"""Data model shared by the extractor, resolver, cache, traversal and renderers."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class NodeStatus(str, Enum):
    """Classification of a node in an include tree."""

    NORMAL = "normal"
    EXTERNAL = "external"
    MISSING = "missing"
    CIRCULAR = "circular"


@dataclass(frozen=True)
class IncludeToken:
    """A raw include directive argument with its delimiters stripped."""

    name: str
    is_external: bool


@dataclass(frozen=True)
class ExternalInclude:
    """Angle-bracket include, left to the toolchain's search path."""

    name: str

    @property
    def label(self) -> str:
        return self.name

    @property
    def status(self) -> NodeStatus:
        return NodeStatus.EXTERNAL


@dataclass(frozen=True)
class MissingInclude:
    """Quoted include that matched no file in either search location."""

    path: str

    @property
    def label(self) -> str:
        return self.path

    @property
    def status(self) -> NodeStatus:
        return NodeStatus.MISSING


@dataclass(frozen=True)
class LocalInclude:
    """Quoted include resolved to a file in the project."""

    path: str

    @property
    def label(self) -> str:
        return self.path


Resolution = ExternalInclude | MissingInclude | LocalInclude


class DependencyRecord(BaseModel):
    """Cached result for one canonical path. Never modified once stored."""

    model_config = ConfigDict(frozen=True)

    status: NodeStatus
    children: tuple[str, ...] = ()


class TreeEvent(BaseModel):
    """One node of an include tree, emitted in depth-first pre-order."""

    model_config = ConfigDict(frozen=True)

    depth: int = Field(ge=0)
    label: str
    status: NodeStatus


class IncludeTree(BaseModel):
    """Nested form of an event stream, used for structured output."""

    label: str
    status: NodeStatus
    children: list["IncludeTree"] = Field(default_factory=list)


class Diagnostic(BaseModel):
    """A file that was found but could not be read."""

    path: str
    message: str
