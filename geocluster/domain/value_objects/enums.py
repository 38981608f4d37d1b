"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class RenderKind(str, Enum):
    SINGLETON = "singleton"
    CLUSTER = "cluster"
