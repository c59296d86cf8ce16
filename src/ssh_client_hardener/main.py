"""CLI entry point for SSH Client Hardener."""

import argparse
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from ssh_client_hardener import __version__
from ssh_client_hardener.config import ClientHardenerConfig
from ssh_client_hardener.exceptions import HardenerError
from ssh_client_hardener.generator import ClientConfigGenerator
from ssh_client_hardener.log import configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:]

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="ssh-client-hardener",
        description="SSH Client Hardener - generate a hardened ssh_config",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview the hardened configuration
  ssh-client-hardener --dry-run

  # Allow CBC ciphers and target two ports
  sudo ssh-client-hardener --legacy-ciphers --port 22 --port 2222

  # Write to a per-user file and check it with ssh -G
  ssh-client-hardener --output ~/.ssh/config.d/hardening --check

Environment variables:
  SSH_CLIENT_ALLOW_LEGACY_CIPHERS  - Offer CBC ciphers (true/false)
  SSH_CLIENT_ALLOW_WEAK_MAC        - Offer hmac-sha1 (true/false)
  SSH_CLIENT_ALLOW_WEAK_KEX        - Offer SHA-1 key exchange (true/false)
  SSH_CLIENT_PORTS                 - Comma-separated ports, primary first
  SSH_CLIENT_IPV6_ENABLED          - Allow IPv6 (true/false)
  OUTPUT_PATH                      - File to write
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument(
        "--legacy-ciphers",
        action="store_true",
        help="Also offer CBC-mode ciphers",
    )

    parser.add_argument(
        "--weak-mac",
        action="store_true",
        help="Also offer hmac-sha1",
    )

    parser.add_argument(
        "--weak-kex",
        action="store_true",
        help="Also offer SHA-1 key exchange algorithms",
    )

    parser.add_argument(
        "--port",
        dest="ports",
        type=int,
        action="append",
        help="SSH port (repeatable, first is primary; overrides config/env)",
    )

    parser.add_argument(
        "--ipv6",
        action="store_true",
        help="Allow IPv6 as well as IPv4",
    )

    parser.add_argument(
        "--output",
        type=Path,
        help="Configuration file to write",
    )

    parser.add_argument(
        "--host",
        type=str,
        help="Host pattern for the generated block (default: *)",
    )

    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Omit the comment header",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Check the written file with ssh -G",
    )

    parser.add_argument(
        "--backup-dir",
        type=Path,
        help="Custom backup directory",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the configuration without writing it",
    )

    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> ClientHardenerConfig:
    """Load configuration from the environment and apply CLI overrides.

    Args:
        args: Parsed command-line arguments

    Returns:
        Configuration object
    """
    config = ClientHardenerConfig.from_env()

    if args.legacy_ciphers:
        config.policy.allow_legacy_ciphers = True

    if args.weak_mac:
        config.policy.allow_weak_mac = True

    if args.weak_kex:
        config.policy.allow_weak_kex = True

    if args.ports:
        config.policy.ports = list(args.ports)

    if args.ipv6:
        config.policy.ipv6_enabled = True

    if args.output:
        config.output.path = args.output

    if args.host:
        config.output.host_pattern = args.host

    if args.no_header:
        config.output.header = False

    if args.check:
        config.output.check_syntax = True

    if args.backup_dir:
        config.backup.directory = args.backup_dir

    return config


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Main entry point for CLI.

    Raises:
        SystemExit: Always exits with appropriate code
    """
    args = parse_args(argv)

    try:
        config = load_config(args)

        level = config.logging.level
        if args.verbose:
            level = "DEBUG"
        elif args.quiet:
            level = "ERROR"
        configure_logging(level, config.logging.file, config.logging.json_format)

        generator = ClientConfigGenerator(config, dry_run=args.dry_run, verbose=args.verbose)

        if args.dry_run:
            sys.stdout.write(generator.run())
            sys.exit(0)

        if not args.quiet and not args.yes:
            policy = config.policy
            print("Configuration Summary:")
            print(f"  Output: {config.output.path}")
            print(f"  Ports: {', '.join(str(p) for p in policy.ports)}")
            print(f"  IPv6: {'Enabled' if policy.ipv6_enabled else 'Disabled'}")
            print(f"  Legacy ciphers: {'Allowed' if policy.allow_legacy_ciphers else 'Denied'}")
            print(f"  Weak MACs: {'Allowed' if policy.allow_weak_mac else 'Denied'}")
            print(f"  Weak KEX: {'Allowed' if policy.allow_weak_kex else 'Denied'}")
            print(f"  Backup Directory: {config.backup.directory}\n")

            response = input("Write configuration? (yes/no): ")
            if response.lower() != "yes":
                print("Aborted.")
                sys.exit(0)

        generator.run()

        if not args.quiet:
            print(f"SSH client configuration written to {config.output.path}")

        sys.exit(0)

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)

    except HardenerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
