# src/pasthisto/cli/app.py
import argparse
import logging
import sys

from pasthisto import __version__
from pasthisto.cli.check import check_documents
from pasthisto.cli.common import add_standard_flags
from pasthisto.config.loader import dump_config, load_config
from pasthisto.infra.logging import log_run_header, setup_logging

DESCRIPTIONS = {
    'check': 'Decode Histogrammar JSON documents (files or directories) and report which ones are valid.',
}


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser("pasthisto", description="Histogrammar JSON snapshot decoder.")
    p.add_argument("--version", action="version", version=f"pasthisto {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser('check', help=DESCRIPTIONS['check'], description=DESCRIPTIONS['check'])
    add_standard_flags(sp)
    sp.add_argument("paths", nargs="+", help="JSON files or directories to check")
    sp.add_argument("--verbose", action="store_true", help="Log every node of each decoded tree")
    sp.add_argument("--dump-config", action="store_true", help="Log the effective configuration first")

    args = p.parse_args(argv)

    try:
        cfg = load_config(args.project, args.config)
    except (OSError, ValueError) as e:
        # tomllib.TOMLDecodeError is a ValueError
        print(f"pasthisto: cannot load configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(
        args.log_file or cfg.logging.log_file,
        also_console=True,
        suppress_initial_message=True,
        level=cfg.logging.level,
    )
    log_run_header(args.cmd)
    if args.dump_config:
        dump_config(cfg, log_fn=logging.info)

    summary = check_documents(args.paths, cfg, verbose=args.verbose)
    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
