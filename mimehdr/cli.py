#!/usr/bin/env python

"""
CLI interface to mimehdr
"""

from configparser import ConfigParser
from argparse import ArgumentParser
import sys
from typing import BinaryIO, List

from mimehdr import __version__
from mimehdr.formatter import NoteCollector, TextFormatter
from mimehdr.headers import MAX_HDR_SIZE, HeaderProcessor
from mimehdr.speak import levels
from mimehdr.type import RawHeaderListType


def main(argv: List[str] = None) -> int:
    parser = ArgumentParser(description="Check the MIME-Version header of a message.")
    parser.set_defaults(verbose=False, max_header_size=None)

    parser.add_argument(
        "files",
        metavar="FILE",
        nargs="*",
        help="message files to check; reads stdin if none are given",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="explain each note",
    )
    parser.add_argument(
        "--max-header-size",
        action="store",
        type=int,
        dest="max_header_size",
        help=f"warn about header lines larger than this (default {MAX_HDR_SIZE})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    config_parser = ConfigParser()
    config_parser.read_dict(
        {"mimehdr": {"max_header_size": str(MAX_HDR_SIZE), "verbose": "False"}}
    )
    config = config_parser["mimehdr"]
    if args.max_header_size is not None:
        config["max_header_size"] = str(args.max_header_size)
    if args.verbose:
        config["verbose"] = "True"

    formatter = TextFormatter(
        output,
        {"tty_out": sys.stdout.isatty(), "verbose": config.getboolean("verbose")},
    )

    status = 0
    sources = args.files or ["-"]
    for source in sources:
        if source == "-":
            headers = read_header_block(sys.stdin.buffer)
        else:
            with open(source, "rb") as fh:
                headers = read_header_block(fh)
        collector = NoteCollector()
        hp = HeaderProcessor(collector.add_note, config.getint("max_header_size"))
        _, parsed_headers = hp.process(headers)
        formatter.format_results(
            "<stdin>" if source == "-" else source, parsed_headers, collector.notes
        )
        if collector.has_level(levels.BAD):
            status = 1
    return status


def read_header_block(fh: BinaryIO) -> RawHeaderListType:
    """
    Read a message's header block from fh, up to the first empty line, unfolding any
    continuation lines. Lines without a colon are returned with an empty value.
    """
    headers: RawHeaderListType = []
    for line in fh:
        line = line.rstrip(b"\r\n")
        if not line:
            break
        if line[:1] in (b" ", b"\t") and headers:
            name, value = headers[-1]
            headers[-1] = (name, value + line)
            continue
        name, _, value = line.partition(b":")
        headers.append((name, value))
    return headers


def output(out: str) -> None:
    sys.stdout.write(out)


def main_exit() -> None:
    sys.exit(main())


if __name__ == "__main__":
    main_exit()
