"""XFile Manager entry point.

Examples:
  xfilemanager                          Browse the current directory on :8080
  xfilemanager --root /srv/www          Browse another document root
  xfilemanager install site blog        Copy deployment files into root/site and root/blog
"""

import argparse
import logging
import os
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

from xfilemanager.config import ENV_PREFIX, get_settings
from xfilemanager.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return get_version("xfilemanager")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xfilemanager",
        description="\U0001f4c1 XFile Manager - browse and download files from a local directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  xfilemanager                          Start the web browser on the current directory
  xfilemanager --root ~/htdocs -p 9000  Serve ~/htdocs on port 9000
  xfilemanager install /srv/www/app     Install deployment files into a directory
""",
    )
    parser.add_argument(
        "--root",
        "-r",
        type=str,
        default=None,
        help="Directory to serve (default: XFILE_ROOT_DIR or the current directory)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the web server (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port for the web server (default: 8080)",
    )
    parser.add_argument("--dev", action="store_true", help="Development mode with auto-reload")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {_package_version()}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        choices=["serve", "install"],
        help="'serve' (default) runs the web app; 'install' copies deployment files",
    )
    parser.add_argument(
        "directories",
        nargs="*",
        help="Target directories for 'install' (absolute or relative to the root)",
    )
    return parser


def run_install(directories: list[str]) -> int:
    """Install into *directories* and print a summary. Returns the exit code."""
    from xfilemanager.installer import Installer

    installer = Installer(get_settings())
    report = installer.install(directories)
    for result in report.results:
        print(f"  [{result.status.value.upper():9}] {result.directory}: {result.message}")
    print(
        f"\n  Summary: {report.installed} installed, "
        f"{report.skipped} skipped, {report.failed} failed"
    )
    return 1 if report.failed else 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)

    # CLI flags win over config; exported so reloaded dev workers see them too.
    if args.root is not None:
        os.environ[f"{ENV_PREFIX}ROOT_DIR"] = args.root
        get_settings.cache_clear()

    settings = get_settings()
    if not settings.root_dir.is_dir():
        parser.error(f"root directory does not exist: {settings.root_dir}")

    if args.command == "install":
        if not args.directories:
            parser.error("install needs at least one directory")
        raise SystemExit(run_install(args.directories))

    if args.directories:
        parser.error("directories are only accepted by the 'install' command")

    host = args.host or settings.web_host
    port = args.port or settings.web_port

    try:
        from xfilemanager.dashboard import run_dashboard

        run_dashboard(host=host, port=port, dev=args.dev)
    except KeyboardInterrupt:
        logger.info("XFile Manager stopped.")


if __name__ == "__main__":
    main()
