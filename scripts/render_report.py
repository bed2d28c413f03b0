#!/usr/bin/env python
"""
Data Mining Report CLI

Render a data mining or archive validation model as an HTML report.

Usage:
    # Data mining results
    python scripts/render_report.py --model results/datamine.json

    # Archive validation, custom output path
    python scripts/render_report.py --model es.json --mode validation --output es.html

    # Override precision / geometry settings
    python scripts/render_report.py --model results/datamine.json --config report.json
"""
import sys
import json
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from config.settings import settings
from datamine.config import ReportConfig
from datamine.model import ModelIntegrityError
from datamine.render import MODES, render_report_file


def setup_logging(verbose: bool = False, log_dir: Path = None):
    """Configure logging.

    Args:
        verbose: Enable DEBUG level output on the console
        log_dir: Directory for log files (defaults to settings.LOGS_DIR)
    """
    logger.remove()

    level = "DEBUG" if verbose else "INFO"
    fmt = "<green>{time:HH:mm:ss}</green> | <level>{level:<8}</level> | <cyan>{message}</cyan>"

    logger.add(
        sys.stdout,
        format=fmt,
        level=level,
        colorize=True,
    )

    # File logging
    log_dir = log_dir or settings.LOGS_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "render_report_{time:YYYY-MM-DD}.log",
        level="DEBUG",
        rotation="1 day",
        retention="30 days"
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Data Mining Report - render model JSON as HTML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --model results/datamine.json
  %(prog)s --model es.json --mode validation --output es.html
        """
    )
    parser.add_argument(
        '--model', '-m',
        type=Path,
        required=True,
        help='Model JSON produced by the analytics engine'
    )
    parser.add_argument(
        '--mode',
        default='datamine',
        choices=MODES,
        help='Report type (default: datamine)'
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        help='Output HTML file (default: RESULTS_DIR/<report file>)'
    )
    parser.add_argument(
        '--config', '-c',
        type=Path,
        help='Report configuration JSON (precision, detail view geometry)'
    )
    parser.add_argument(
        '--log-dir',
        type=Path,
        help='Directory for log files (default: LOGS_DIR)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )
    return parser.parse_args(argv)


def default_output(mode: str) -> Path:
    filename = settings.VALIDATION_FILENAME if mode == 'validation' else settings.REPORT_FILENAME
    return settings.RESULTS_DIR / filename


def load_config(path: Path) -> ReportConfig:
    with open(path, 'r', encoding='utf-8') as f:
        return ReportConfig.from_dict(json.load(f))


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_dir)

    config = load_config(args.config) if args.config else ReportConfig()
    output = args.output or default_output(args.mode)

    logger.info(f"Rendering {args.mode} report from {args.model}")

    try:
        report_path = render_report_file(args.model, output, args.mode, config)
    except ModelIntegrityError as e:
        logger.error(f"Invalid model {args.model}: {e}")
        return 1
    except FileNotFoundError as e:
        logger.error(f"Model not found: {e}")
        return 1

    logger.info(f"Open in browser: file://{report_path.resolve()}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
