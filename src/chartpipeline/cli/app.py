import argparse
import logging
import sys
from pathlib import Path

from chartpipeline.cli.output import print_summary, to_json
from chartpipeline.config.charts import default_config, load_chart_config
from chartpipeline.config.resolution import cascade, resolve_log_level
from chartpipeline.errors import ChartError
from chartpipeline.pipeline.charts import build_pipeline
from chartpipeline.utils.load import load_json, load_records

logger = logging.getLogger(__name__)

CHART_KINDS = ("area", "bar", "gauge", "map")


def _parser() -> argparse.ArgumentParser:
    # Common options shared by top-level and subcommands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=argparse.SUPPRESS,
        help="set logging level (default: WARNING)",
    )

    parser = argparse.ArgumentParser(
        prog="chartpipe",
        description="Turn record arrays into chart geometry.",
        parents=[common],
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_render = sub.add_parser(
        "render",
        help="run one chart pipeline and print its shapes",
        parents=[common],
    )
    p_render.add_argument("--kind", "-k", choices=CHART_KINDS, help="chart kind (defaults to the config's kind)")
    p_render.add_argument("--records", "-r", required=True, help="JSON array or JSON Lines file of records")
    p_render.add_argument("--config", "-c", help="chart config YAML")
    p_render.add_argument("--width", type=float, default=None, help="container width in px")
    p_render.add_argument("--height", type=float, default=None, help="container height in px")
    p_render.add_argument("--topology", help="TopoJSON file with region boundaries (map only)")
    p_render.add_argument(
        "--format",
        choices=["json", "summary"],
        default="json",
        help="json shapes (default) or a rich summary table",
    )
    return parser


def handle_render(args: argparse.Namespace) -> int:
    if args.config:
        config = load_chart_config(Path(args.config))
        if args.kind and args.kind != config.kind:
            raise ValueError(f"--kind {args.kind} conflicts with config kind {config.kind}")
    elif args.kind:
        config = default_config(args.kind)
    else:
        raise ValueError("either --kind or --config is required")

    records = load_records(Path(args.records))
    extra = {}
    if config.kind == "map":
        topology_path = cascade(args.topology, config.topology_path)
        if topology_path:
            extra["topology"] = load_json(Path(topology_path))
    elif args.topology:
        logger.warning("--topology is ignored for %s charts", config.kind)

    pipeline = build_pipeline(
        config, records=records, width=args.width, height=args.height, **extra
    )
    result = pipeline.result
    if args.format == "summary":
        print_summary(result)
    else:
        sys.stdout.write(to_json(result) + "\n")
    return 0


def main(argv=None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    level = resolve_log_level(getattr(args, "log_level", None))
    logging.basicConfig(level=level.value, format="%(message)s")

    if args.cmd == "render":
        try:
            return handle_render(args)
        except (ChartError, ValueError, TypeError, FileNotFoundError) as exc:
            logger.error("render failed: %s", exc)
            return 1
    parser.error(f"unknown command {args.cmd!r}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
