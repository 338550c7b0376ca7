# Parse tree for the C- descent parser.
# Nodes live in one arena per parse and refer to their children by index.

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

EPSILON_LABEL = "ε"


class NodeKind(Enum):
    TERMINAL = "terminal"
    NONTERMINAL = "nonterminal"
    EPSILON = "epsilon"


@dataclass
class ParseTreeNode:
    kind: NodeKind
    label: str
    lexeme: Optional[str] = None
    children: List[int] = field(default_factory=list)
    node_id: Optional[int] = None


class ParseTree:
    """Arena of parse tree nodes.

    Every node is addressed by its index in ``nodes``. The parser creates a
    node when it enters a production and appends children as sub-parses
    succeed; ``root`` is set once the entry production returns.
    """

    def __init__(self):
        self.nodes: List[ParseTreeNode] = []
        self.root: Optional[int] = None

    def __len__(self):
        return len(self.nodes)

    def _new(self, node: ParseTreeNode) -> int:
        self.nodes.append(node)
        return len(self.nodes) - 1

    def add_terminal(self, name: str, lexeme: str) -> int:
        return self._new(ParseTreeNode(NodeKind.TERMINAL, f"{name}: {lexeme}", lexeme))

    def add_nonterminal(self, rule: str) -> int:
        return self._new(ParseTreeNode(NodeKind.NONTERMINAL, rule))

    def add_epsilon(self) -> int:
        return self._new(ParseTreeNode(NodeKind.EPSILON, EPSILON_LABEL))

    def add_child(self, parent: int, child: int) -> None:
        node = self.nodes[parent]
        if node.kind != NodeKind.NONTERMINAL:
            raise ValueError(f"cannot attach children to {node.kind.value} node '{node.label}'")
        node.children.append(child)

    def node(self, index: int) -> ParseTreeNode:
        return self.nodes[index]

    def children(self, index: int) -> List[int]:
        return self.nodes[index].children

    def label(self, index: int) -> str:
        return self.nodes[index].label

    def child_labels(self, index: int) -> List[str]:
        return [self.nodes[c].label for c in self.nodes[index].children]

    def walk(self, start: Optional[int] = None) -> Iterator[Tuple[int, int]]:
        """Pre-order traversal yielding (index, depth) for every reachable node."""
        if start is None:
            start = self.root
        if start is None:
            return
        stack = [(start, 0)]
        while stack:
            index, depth = stack.pop()
            yield index, depth
            for child in reversed(self.nodes[index].children):
                stack.append((child, depth + 1))


def assign_ids(tree: ParseTree, counter: int = 0) -> int:
    """Number every node in pre-order starting at ``counter``.

    Returns the next unused value so callers can keep numbering across trees.
    """
    for index, _ in tree.walk():
        tree.nodes[index].node_id = counter
        counter += 1
    return counter


# pretty print the tree with box-drawing connectors
def render_text(tree: ParseTree) -> List[str]:
    lines = []
    if tree.root is None:
        return lines
    # (index, prefix, is_last, is_root)
    stack = [(tree.root, '', True, True)]
    while stack:
        index, prefix, is_last, is_root = stack.pop()
        node = tree.nodes[index]
        connector = '└── ' if is_last else '├── '
        lines.append(node.label if is_root else prefix + connector + node.label)
        new_prefix = prefix + ('    ' if is_last else '│   ')
        last = len(node.children) - 1
        for i in range(last, -1, -1):
            stack.append((node.children[i], new_prefix, i == last, False))
    return lines
