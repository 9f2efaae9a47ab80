import argparse
import json
import logging
from typing import Any, List, Optional

from psd_layout.api.layers import LayerRecord
from psd_layout.api.pipeline import apply_effects
from psd_layout.api.tree import build_tree
from psd_layout.version import __version__

try:
    from IPython.lib.pretty import pprint
except ImportError:
    from pprint import pprint

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="psd-layout command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser("show", help="Show the layer tree of a dump")
    show_parser.add_argument("input_file", help="Input JSON layer dump")
    show_parser.add_argument(
        "--no-heuristics",
        action="store_true",
        help="Do not infer effects from layer names.",
    )

    return parser.parse_args(argv)


def load_records(path: str) -> List[LayerRecord]:
    """
    Load flat layer records from a JSON dump.

    The dump is either a list of layer dicts or an object with a ``layers``
    list, in back-to-front order.
    """
    with open(path, "r", encoding="utf-8") as f:
        data: Any = json.load(f)
    if isinstance(data, dict):
        data = data.get("layers", [])
    return [LayerRecord.from_dict(item) for item in data]


def main(argv: Optional[List[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.verbose:
        logging.getLogger("psd_layout").setLevel(logging.DEBUG)
    else:
        logging.getLogger("psd_layout").setLevel(logging.INFO)

    if args.command == "show":
        try:
            records = load_records(args.input_file)
        except (IOError, ValueError, KeyError) as e:
            logger.error("Failed to read %s: %s", args.input_file, e)
            return 1
        roots = build_tree(records)
        apply_effects(roots, heuristics=not args.no_heuristics)
        for layer in roots:
            pprint(layer)

    return None


if __name__ == "__main__":
    main()
