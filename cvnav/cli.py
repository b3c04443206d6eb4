"""CLI entry point for the CV navigator."""

import argparse
import logging
from pathlib import Path

import yaml

from cvnav.config import Config, load_config
from cvnav.content import ContentPane, ContentRegistry
from cvnav.controller import ScrollEvent, ScrollNavigator
from cvnav.graph import build_graph
from cvnav.models import Direction
from cvnav.state import PagePointer


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="CV page navigator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    parser.add_argument("--debug", action="store_true", help="Use the debug navigation preset")
    sub = parser.add_subparsers(dest="command")

    # graph command
    sub.add_parser("graph", help="Print the prev/next links of every node")

    # order command
    order_parser = sub.add_parser("order", help="Print pages in navigation order")
    order_parser.add_argument(
        "--reverse", action="store_true",
        help="Walk prev links instead of next links",
    )

    # simulate command
    sim_parser = sub.add_parser("simulate", help="Feed wheel deltas through a navigator")
    sim_parser.add_argument(
        "deltas", nargs="+", type=float,
        help="Raw wheel deltas, positive scrolls towards the next page",
    )
    sim_parser.add_argument("--content-height", type=float, default=600.0, help="Scroll height of every page")
    sim_parser.add_argument("--viewport-height", type=float, default=400.0, help="Visible height of every page")

    # config command
    sub.add_parser("config", help="Show the resolved configuration")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.debug:
        config = config.model_copy(update={"debug": True})

    if args.command == "graph":
        graph = build_graph(config.chapters)
        for chapter_id, nodes in graph.to_dict().items():
            print(chapter_id)
            for node_id, edges in nodes.items():
                prev = "/".join(edges.get("prev", ["-"]))
                nxt = "/".join(edges.get("next", ["-"]))
                print(f"  {node_id:<32} prev={prev:<40} next={nxt}")

    elif args.command == "order":
        graph = build_graph(config.chapters)
        direction = Direction.PREV if args.reverse else Direction.NEXT
        start = graph.pages()[-1] if args.reverse else graph.pages()[0]
        page = start
        for _ in range(len(graph.pages())):
            print(page)
            page = graph.resolve(page, direction)
            if page is None:
                break

    elif args.command == "simulate":
        _simulate(config, args.deltas, args.content_height, args.viewport_height)

    elif args.command == "config":
        print(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False), end="")

    else:
        parser.print_help()


def _simulate(
    config: Config,
    deltas: list[float],
    content_height: float,
    viewport_height: float,
) -> None:
    graph = build_graph(config.chapters)
    pointer = PagePointer(*config.default_page)
    pointer.ensure_valid(graph)
    contents = ContentRegistry.for_graph(
        graph, lambda _sub_id: ContentPane(content_height, viewport_height),
    )
    navigator = ScrollNavigator.from_config(config, graph, pointer, contents)

    for i, delta in enumerate(deltas, start=1):
        event = ScrollEvent(delta=delta)
        outcome = navigator.on_wheel(event, delta)
        chapter_id, subchapter_id = pointer.current
        pane = contents.get(subchapter_id)
        print(
            f"{i:3d} {delta:+9.1f} {outcome.value:<9} {chapter_id}/{subchapter_id} "
            f"top={pane.scroll_top:.1f} border={navigator.border_hits_left} "
            f"after={navigator.after_border_hits_left}"
        )


if __name__ == "__main__":
    main()
