from dataclasses import dataclass


@dataclass
class ParserConfig:
    """Configuration for parser and graph output"""
    max_depth: int = 500
    node_shape: str = "box"
    font_name: str = "Arial"
    default_output: str = "parse_tree.dot"
