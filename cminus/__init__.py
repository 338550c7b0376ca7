# cminus/__init__.py

from .config import ParserConfig
from .lexical import Scanner, Token, TokenType
from .parse_tree import EPSILON_LABEL, NodeKind, ParseTree, ParseTreeNode, assign_ids, render_text
from .parser import ParseError, ParseResult, Parser, parse_source
from .graphviz import escape_label, to_dot, write_dot

__all__ = [
    'ParserConfig',
    'Scanner',
    'Token',
    'TokenType',
    'EPSILON_LABEL',
    'NodeKind',
    'ParseTree',
    'ParseTreeNode',
    'assign_ids',
    'render_text',
    'ParseError',
    'ParseResult',
    'Parser',
    'parse_source',
    'escape_label',
    'to_dot',
    'write_dot',
]
