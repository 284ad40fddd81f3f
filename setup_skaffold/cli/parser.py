"""
setup-skaffold CLI argument parser.

This module implements the command-line interface for setup-skaffold using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from setup_skaffold.config import load_config
from setup_skaffold.core.exceptions import SetupSkaffoldError
from setup_skaffold.pipeline import run_pipeline

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("setup-skaffold")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """setup-skaffold command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="setup-skaffold",
            description="Download, verify and install Skaffold",
            epilog=(
                "Settings may also come from setup-skaffold.yaml and from the "
                "INPUT_VERSION / INPUT_GITHUB-TOKEN / GITHUB_TOKEN environment "
                "variables.\n\n"
                "--version prints the version of setup-skaffold itself; pass the "
                "Skaffold version to install as VERSION, e.g. "
                "`setup-skaffold 2.13.0`."
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "skaffold_version",
            nargs="?",
            metavar="VERSION",
            help='Skaffold version to install, e.g. "2.13.0" (default: latest)',
        )
        parser.add_argument(
            "--version", action="version", version=f"setup-skaffold {__version__}"
        )
        parser.add_argument(
            "--github-token",
            metavar="TOKEN",
            help="GitHub token used to look up the latest release",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="PATH",
            help="Tool cache directory (default: $RUNNER_TOOL_CACHE or ~/.setup-skaffold/tool-cache)",
        )
        parser.add_argument(
            "--install-path",
            type=Path,
            metavar="PATH",
            help="Where to install the binary (default: /usr/local/bin/skaffold)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./setup-skaffold.yaml)",
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        try:
            config = load_config(
                parsed_args.config,
                overrides={
                    "version": parsed_args.skaffold_version,
                    "github_token": parsed_args.github_token,
                    "cache_dir": parsed_args.cache_dir,
                    "install_path": parsed_args.install_path,
                },
            )
            run_pipeline(config)
            return 0
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            if isinstance(e, SetupSkaffoldError):
                logger.error(f"Error: {e}")
            else:
                logger.error(f"Unexpected error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
