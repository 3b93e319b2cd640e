"""Command line entry point for the check_http_xml Nagios plugin."""

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .__version__ import __version__
from .config.loader import ConfigLoader
from .config.models import CheckConfig, DEFAULT_CONTENT_TYPE, DEFAULT_TIMEOUT
from .utils.errors import CheckError
from .utils.logger import level_for_verbosity, setup_logger
from .utils.metrics import CheckOutcome
from .utils.status import Status
from .workflow import CheckWorkflow

CONFIG_OPTIONS = (
    "url", "attributes", "warning", "critical", "divisor", "perfvars",
    "outputvars", "timeout", "metadata", "contenttype", "ignoressl",
)


class PluginArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors as UNKNOWN (exit code 3)."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(Status.UNKNOWN.exit_code, f"{Status.UNKNOWN.to_word()} - {message}\n")


class CheckApp:
    """
    Single-shot check application.

    Loads and validates configuration, then runs one check workflow.
    """

    def __init__(
        self,
        options: Dict[str, Any],
        config_path: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize check application.

        Args:
            options: Command line option values
            config_path: Optional YAML configuration file
            logger: Optional logger instance

        Raises:
            ConfigError: If configuration is invalid
        """
        self.logger = logger or setup_logger("main")
        self.config = self._load_config(options, config_path)
        self.workflow = CheckWorkflow(self.config, self.logger)

    def _load_config(self, options: Dict[str, Any], config_path: Optional[str]) -> CheckConfig:
        """
        Load and validate configuration.

        Returns:
            CheckConfig: Loaded configuration

        Raises:
            ConfigError: If configuration is invalid
        """
        if config_path:
            self.logger.info(f"Loading configuration from {config_path}")
        config = ConfigLoader.load(options, config_path)
        self.logger.info(
            "Configuration loaded",
            extra={"url": config.url, "attributes": [str(s.path) for s in config.attribute_specs()]}
        )
        return config

    def run(self) -> CheckOutcome:
        """
        Execute the check.

        Returns:
            CheckOutcome: Result of the check
        """
        return asyncio.run(self.workflow.run())


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command line parser.

    Returns:
        argparse.ArgumentParser: Configured parser
    """
    parser = PluginArgumentParser(
        prog='check_http_xml',
        description='Nagios plugin to check XML attributes via http(s)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Threshold format: see
  https://nagios-plugins.org/doc/guidelines.html#THRESHOLDFORMAT

Examples:
  check_http_xml --url http://192.168.5.10:9332/local_stats \\
      --attributes '{shares}->{dead}' --warning :5 --critical :10 \\
      --perfvars '{shares}->{dead},{shares}->{live},{total},{ping}->{"ns2:elapsedMs"}' \\
      --outputvars '{status_message}'

  # Every top-level field as perfdata
  check_http_xml -u https://host/status -a '{load}' -w 5 -c 10 -p '*'
        """
    )

    parser.add_argument('-u', '--url', help='URL of the XML document')
    parser.add_argument(
        '-a', '--attributes',
        help="CSV list of checked fields, e.g. '{shares}->{dead},{shares}->{uptime}'"
    )
    parser.add_argument('-w', '--warning', help='CSV list of warning ranges, one per attribute')
    parser.add_argument('-c', '--critical', help='CSV list of critical ranges, one per attribute')
    parser.add_argument(
        '-d', '--divisor',
        help='CSV list of divisors applied to the attribute values, e.g. 1000000'
    )
    parser.add_argument(
        '-p', '--perfvars',
        help="'*' or CSV list of fields to include in perfdata "
             "(default: the checked attributes)"
    )
    parser.add_argument(
        '-o', '--outputvars',
        help="'*' or CSV list of fields shown in the status message, same syntax as perfvars"
    )
    parser.add_argument(
        '-t', '--timeout', type=float,
        help=f'Seconds before the connection times out (default: {DEFAULT_TIMEOUT})'
    )
    parser.add_argument('-m', '--metadata', help='Request body sent as application/xml')
    parser.add_argument(
        '-T', '--contenttype',
        help=f'Expected response content type, a regular expression (default: {DEFAULT_CONTENT_TYPE})'
    )
    parser.add_argument(
        '--ignoressl', action='store_true', default=None,
        help='Ignore bad SSL certificates'
    )
    parser.add_argument('--config', help='YAML file with option values; command line wins')
    parser.add_argument(
        '-v', '--verbose', action='count', default=0,
        help='Log more details to stderr (-v info, -vv debug)'
    )
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def run(argv: Optional[List[str]] = None) -> CheckOutcome:
    """
    Parse arguments and run one check.

    Args:
        argv: Command line arguments, defaults to sys.argv

    Returns:
        CheckOutcome: Result of the check, including configuration errors
    """
    args = build_parser().parse_args(argv)

    level = level_for_verbosity(args.verbose, os.getenv('LOG_LEVEL', 'WARNING'))
    logger = setup_logger("check_http_xml", level)

    options = {name: getattr(args, name) for name in CONFIG_OPTIONS}

    try:
        app = CheckApp(options, config_path=args.config, logger=logger)
        return app.run()

    except CheckError as e:
        logger.error(f"Check aborted: {e}", extra={"error_type": type(e).__name__})
        return CheckOutcome(status=e.status, message=str(e))

    except Exception as e:
        logger.error("Unexpected error", exc_info=True)
        return CheckOutcome(status=Status.UNKNOWN, message=f"Unexpected error: {e}")


def main(argv: Optional[List[str]] = None):
    """
    CLI entry point.

    Prints the status line and exits with the Nagios status code.
    """
    outcome = run(argv)
    print(outcome.status_line())
    sys.exit(outcome.status.exit_code)


if __name__ == '__main__':
    main()
