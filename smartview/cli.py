"""Command-line interface for smartview."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .context import MAX_ENTRIES_SMALL, ParseContext
from .exceptions import SmartViewError
from .mapi.properties import prop_tag_name
from .registry import default_registry
from .render import hexdump, render_text
from .utils import parse_hex


def _tag(text):
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid property tag: {text!r}") from None


def _read_input(args):
    """Raw bytes from --file, the positional hex words, or hex on stdin."""
    if args.file:
        return args.file.read_bytes()
    if args.hex:
        return parse_hex(' '.join(args.hex))
    return parse_hex(sys.stdin.read())


def _list_parsers(registry):
    print("Parsers:")
    for name in registry.parser_names:
        print(f"  {name}")
    print("Tags:")
    for tag, name in registry.tags():
        label = prop_tag_name(tag) or ''
        print(f"  0x{tag:08X} {label:<28} -> {name}")


def main(argv=None, registry=None):
    registry = registry or default_registry

    parser = argparse.ArgumentParser(
        prog='smartview',
        description='Decode binary MAPI property values into an annotated field tree.',
    )
    parser.add_argument(
        'hex',
        nargs='*',
        help='Bytes to decode as hex (default: read hex text from stdin)',
    )
    parser.add_argument(
        '-f', '--file',
        type=Path,
        help='Read raw bytes from a file instead of hex text',
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        '-p', '--parser',
        help='Decoder to run (see --list)',
    )
    source.add_argument(
        '-t', '--tag',
        type=_tag,
        help='Property tag whose decoder to run, e.g. 0x00710102',
    )
    parser.add_argument(
        '--max-entries',
        type=int,
        default=MAX_ENTRIES_SMALL,
        help=f'Maximum entries in a property list (default: {MAX_ENTRIES_SMALL})',
    )
    parser.add_argument(
        '--named-properties',
        action='store_true',
        help='Describe entries as part of a named-property list',
    )
    parser.add_argument(
        '--rule-condition',
        action='store_true',
        help='Describe entries as part of a rule condition',
    )
    parser.add_argument(
        '--hexdump',
        action='store_true',
        help='Print a hex dump of the input after the decoded tree',
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the decoded tree as JSON',
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List registered decoders and tags, then exit',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log decoder diagnostics to stderr',
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    if args.list:
        _list_parsers(registry)
        return

    if args.parser is None and args.tag is None:
        parser.error("either --parser or --tag is required")

    context = ParseContext(
        max_entries=args.max_entries,
        named_properties=args.named_properties,
        rule_condition=args.rule_condition,
    )

    try:
        data = _read_input(args)
        if args.tag is not None:
            block = registry.parse_property(args.tag, data, context)
            if block is None:
                print(f"Error: no parser registered for tag 0x{args.tag:08X}",
                      file=sys.stderr)
                sys.exit(1)
        else:
            block = registry.parse(args.parser, data, context)
    except (SmartViewError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(block.to_dict(), indent=2))
    else:
        print(render_text(block))

    if args.hexdump:
        print()
        print(hexdump(data))


if __name__ == '__main__':
    main()
