"""
toyc command line front end
Usage: toyc <source> [--tokens] [--ast] [--color]

Examples:
    toyc examples/loop.toy
    toyc examples/loop.toy --tokens --ast
"""

import os
import sys
from pathlib import Path

from toyc.driver import FrontEnd

FLAGS = {
    "--tokens": "dump_tokens",
    "--ast": "dump_ast",
    "--color": "use_colors",
}


def print_usage():
    print(__doc__)
    print("Options:")
    print("  --tokens  - print the token stream before parsing")
    print("  --ast     - print the syntax tree after parsing")
    print("  --color   - color the dumps")


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    positional = [a for a in args if not a.startswith("--")]
    options = [a for a in args if a.startswith("--")]

    if len(positional) != 1:
        print_usage()
        return 1

    unknown = [o for o in options if o not in FLAGS]
    if unknown:
        print(f"Error: unknown option {unknown[0]}")
        print_usage()
        return 1

    source_path = Path(positional[0])
    if not source_path.is_file():
        print(f"Error: source file not found: {source_path}")
        return 1

    config = {FLAGS[o]: True for o in options}

    try:
        front_end = FrontEnd(config)
        passed = front_end.run_file(source_path)
    except Exception as e:
        print(f"Error: {e}")
        if os.environ.get("TOYC_DEBUG"):
            import traceback
            traceback.print_exc()
        return 1

    if passed:
        print(f"OK: {source_path.name} passed all checks")
        return 0
    print(f"FAILED: {source_path.name}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
