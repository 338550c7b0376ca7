# Graphviz output for C- parse trees

import textwrap
from typing import List, Optional

from .config import ParserConfig
from .parse_tree import ParseTree, assign_ids


def escape_label(text: str) -> str:
    result = ""
    for ch in text:
        if ch in ('"', '\\'):
            result += '\\'
        result += ch
    return result


def ret_nodes(tree: ParseTree) -> List[str]:
    """Node and edge statements: each node, its edges, then its children."""
    lines = []
    for index, _ in tree.walk():
        node = tree.node(index)
        lines.append('node%d [label="%s"];' % (node.node_id, escape_label(node.label)))
        for child in node.children:
            lines.append('node%d -> node%d;' % (node.node_id, tree.node(child).node_id))
    return lines


def to_dot(tree: ParseTree, config: Optional[ParserConfig] = None) -> str:
    config = config or ParserConfig()
    assign_ids(tree)
    preconf = textwrap.dedent("""\
    node [shape={shape}, fontname="{font}"];
    edge [fontname="{font}"];
    """).format(shape=config.node_shape, font=config.font_name)
    content = preconf + '\n' + '\n'.join(ret_nodes(tree)) + '\n'
    return 'digraph ParseTree {\n' + textwrap.indent(content, '  ') + '}\n'


def write_dot(tree: ParseTree, path, config: Optional[ParserConfig] = None) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(to_dot(tree, config))
