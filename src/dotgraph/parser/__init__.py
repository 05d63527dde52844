from dotgraph.parser.parser import DotParser, parse_dot

__all__ = ["DotParser", "parse_dot"]
