import logging
from pathlib import Path

from dotgraph.config import Config
from dotgraph.parser.parser import parse_dot
from dotgraph.render import render_graph

logger = logging.getLogger(__name__)


def reformat(
    dot_source: str,
    config: Config | None = None,
    output_path: str | Path | None = None,
) -> str:
    graph = parse_dot(dot_source, config)
    text = render_graph(graph, config)

    if output_path is not None:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info("Wrote %d characters of DOT to %s", len(text), path)

    return text
