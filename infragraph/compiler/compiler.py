from typing import Any, Mapping, Optional

from infragraph.compiler.builder import build
from infragraph.compiler.types import Graph
from infragraph.schemas import load_directory


def compile_graph(payload: Optional[Mapping[str, Any]]) -> Graph:
    """Raw directory payload in, resource graph out."""
    directory = load_directory(payload)
    return build(directory)
