from infragraph.compiler.builder import build
from infragraph.compiler.types import Edge, Graph, Node
from infragraph.compiler.verbs import verb_from_action

__all__ = [
    "build",
    "verb_from_action",
    "Edge",
    "Graph",
    "Node",
]
