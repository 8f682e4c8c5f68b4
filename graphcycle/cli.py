"""graphcycle CLI entry point."""
import argparse
import json
import logging
import sys

import yaml

from graphcycle.core.config import OUTPUT_FORMATS, load_config
from graphcycle.core.detector import GraphCycleDetector
from graphcycle.core.graph_file import GraphFileError, load_graph
from graphcycle.core.logging import setup_logging, get_run_id, timed

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CYCLE = 1
EXIT_BAD_INPUT = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='graphcycle',
        description='graphcycle - dependency cycle detection and execution ordering')
    parser.add_argument('--config', '-c', help='Path to YAML config file')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Verbosity: -v=INFO, -vv=DEBUG')
    parser.add_argument('--json-logs', action='store_true',
                        help='Output logs in JSON format')
    parser.add_argument('--deduplicate-edges', action='store_true',
                        help='Count a repeated dependency only once')
    parser.add_argument('--format', choices=OUTPUT_FORMATS, dest='output_format',
                        help='Result format (overrides config)')
    parser.add_argument('command', choices=('order', 'check'),
                        help='order: print an execution order; check: report whether a cycle exists')
    parser.add_argument('graph', help='Path to YAML graph file')
    return parser.parse_args(argv)


@timed
def run(command, graph, detector, output_format):
    order = detector.find_order(graph.nodes, graph.dependencies)
    extra = {"command": command, "nodes": len(graph.nodes), "edges": len(graph.dependencies)}

    if command == 'check':
        has_cycle = order is None
        if output_format == 'json':
            print(json.dumps({"has_cycle": has_cycle}))
        else:
            print('cycle' if has_cycle else 'acyclic')
        logger.info(f"Cycle check finished: has_cycle={has_cycle}", extra=extra)
        return EXIT_CYCLE if has_cycle else EXIT_OK

    if order is None:
        logger.error("No valid execution order: the graph contains a cycle", extra=extra)
        return EXIT_CYCLE
    if output_format == 'json':
        print(json.dumps(order))
    else:
        for node in order:
            print(node)
    return EXIT_OK


def main(argv=None):
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError, ValueError) as e:
        setup_logging()
        logger.error(f"Could not load config: {e}")
        return EXIT_BAD_INPUT

    # CLI args override config
    if args.verbose:
        config.verbosity = args.verbose
    if args.json_logs:
        config.json_logs = True
    if args.deduplicate_edges:
        config.deduplicate_edges = True
    if args.output_format:
        config.output_format = args.output_format

    setup_logging(config.verbosity, config.json_logs)
    logger.info(f"graphcycle run_id={get_run_id()} command={args.command} graph={args.graph}")

    try:
        graph = load_graph(args.graph)
    except (OSError, yaml.YAMLError, GraphFileError) as e:
        logger.error(f"Could not load graph: {e}", extra={"graph": args.graph})
        return EXIT_BAD_INPUT

    detector = GraphCycleDetector(deduplicate_edges=config.deduplicate_edges)
    return run(args.command, graph, detector, config.output_format)


if __name__ == '__main__':
    sys.exit(main())
