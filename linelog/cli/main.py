# linelog/cli/main.py
from __future__ import annotations

import logging
import sys
from typing import Optional

from linelog.core.errors import LineLogError

from linelog.cli.args import parse_args
from linelog.cli.commands import cmd_log


def main(argv: Optional[list[str]] = None) -> int:
    try:
        args, config = parse_args(argv)

        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

        return cmd_log(config, sys.stdin)
    except LineLogError as e:
        print(f"ERROR: {e.message}")
        if e.hint:
            print(f"Hint: {e.hint}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
