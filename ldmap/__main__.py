# PYTHON_ARGCOMPLETE_OK
import argparse
import asyncio
import logging
from pathlib import Path
import sys

import argcomplete

from ldmap.config import (
    CONF_FORMAT,
    CONF_ORDER,
    CONF_OUTPUT,
    CONF_SORTBY,
    ReportOptions,
    build_options,
)
from ldmap.const import ENV_VERBOSE, SORT_FIELDS, ReportFormat, SortOrder, __version__
from ldmap.core import InputUnavailableError, LdmapError
from ldmap.helpers import get_bool_env, write_file
from ldmap.log import setup_log
from ldmap.output import render_html, render_json
from ldmap.parser import parse_mapfile

_LOGGER = logging.getLogger(__name__)


def parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="ldmap",
        description="Convert a GCC linker map file into JSON or an HTML report.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="Enable verbose logs.",
        action="store_true",
        default=get_bool_env(ENV_VERBOSE),
    )
    parser.add_argument(
        "-q", "--quiet", help="Disable all logs.", action="store_true"
    )
    parser.add_argument(
        "-l",
        "--log-level",
        help="Set the log level.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("mapfile", help="Path to a GCC map file.", type=Path)
    parser.add_argument(
        "-o",
        "--output",
        help="Write the result to this file instead of stdout.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="YAML file with default values for the report options.",
        type=Path,
    )
    parser.add_argument(
        "--sortby",
        help="Sort regions, sections and symbols by this field.",
        choices=SORT_FIELDS,
    )
    parser.add_argument(
        "--order",
        help="Sort order (default: asc).",
        choices=[order.value for order in SortOrder],
    )
    parser.add_argument(
        "--format",
        help="Output format (default: json).",
        choices=[report_format.value for report_format in ReportFormat],
    )

    argcomplete.autocomplete(parser)

    return parser.parse_args(argv[1:])


def generate_report(mapfile: Path, options: ReportOptions) -> str:
    if not mapfile.is_file():
        raise InputUnavailableError(f'file "{mapfile}" not found!')

    data = asyncio.run(
        parse_mapfile(
            mapfile,
            sortby=options.sortby,
            order=options.order,
            output_format=options.output_format,
        )
    )

    if options.report_format == ReportFormat.HTML:
        return render_html(data)
    return render_json(data)


def run_ldmap(argv):
    args = parse_args(argv)
    if args.verbose:
        args.log_level = "DEBUG"
    elif args.quiet:
        args.log_level = "CRITICAL"

    setup_log(log_level=args.log_level)

    try:
        options = build_options(
            {
                CONF_SORTBY: args.sortby,
                CONF_ORDER: args.order,
                CONF_FORMAT: args.format,
                CONF_OUTPUT: args.output,
            },
            args.config,
        )
        report = generate_report(args.mapfile, options)
        if options.output is not None:
            write_file(options.output, report)
            _LOGGER.info("Wrote %s report to %s", options.report_format, options.output)
        else:
            print(report)
    except LdmapError as e:
        _LOGGER.error(e, exc_info=args.verbose)
        return 1
    return 0


def main():
    try:
        return run_ldmap(sys.argv)
    except KeyboardInterrupt:
        return 1


if __name__ == "__main__":
    sys.exit(main())
