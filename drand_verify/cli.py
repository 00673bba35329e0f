"""
drand_verify.cli
----------------

Verify one beacon of a known drand network from the command line.

Examples:
  # League of Entropy mainnet (chained), see https://api.drand.sh/public/72785
  drand-verify 72785 a609e19a...031747 82f5d3d2...181e42

  # Unchained networks take an empty previous signature
  drand-verify --network quicknet 1000 "" b44679b9...ed5e39

Exit codes:
  0    signature valid (randomness is printed)
  1    signature invalid
  12   signature could not be decoded
  100  wrong number of arguments or an unparsable argument

Environment:
  DRAND_VERIFY_NETWORK     default network (default: mainnet)
  DRAND_VERIFY_LOG_LEVEL   log level for stderr logging (default: WARNING)
  DRAND_VERIFY_LOG_FORMAT  text | json
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

import typer

from . import logging as dlog
from .config import load_config
from .constants import MAX_ROUND
from .errors import VerificationError
from .networks import NETWORKS, get_network
from .randomness import derive_randomness
from .verify import verify

__all__ = ["app", "run", "main", "EXIT_VALID", "EXIT_INVALID", "EXIT_ERROR", "EXIT_USAGE"]

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 12
EXIT_USAGE = 100

log = dlog.get_logger(__name__)

# typer re-exports click's BadParameter; newer typer releases bundle their own
# click, so the usage-error base is taken from typer rather than from `click`.
_UsageError = next(c for c in typer.BadParameter.__mro__ if c.__name__ == "UsageError")

app = typer.Typer(
    name="drand-verify",
    help="Verify a drand beacon and print its randomness.",
    no_args_is_help=False,
    add_completion=False,
)


def _parse_hex(value: str) -> bytes:
    s = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise typer.BadParameter(f"not valid hex: {e}")


def _parse_network(value: Optional[str]) -> str:
    name = value or load_config().network
    if name not in NETWORKS:
        raise typer.BadParameter(f"unknown network '{name}' (known: {', '.join(sorted(NETWORKS))})")
    return name


@app.command()
def verify_beacon(
    round: int = typer.Argument(..., min=0, max=MAX_ROUND, help="Round number"),
    previous_signature: str = typer.Argument(..., help="Previous signature as hex ('' when unchained)"),
    signature: str = typer.Argument(..., help="Signature as hex"),
    network: Optional[str] = typer.Option(
        None, "--network", "-n", help=f"Network preset: {', '.join(sorted(NETWORKS))}"
    ),
) -> None:
    """
    Verify ROUND / PREVIOUS_SIGNATURE / SIGNATURE against a network's public key.
    """
    net = get_network(_parse_network(network))
    prev = _parse_hex(previous_signature)
    sig = _parse_hex(signature)
    dlog.bind(component="cli", network=net.name, round=round)

    try:
        valid = verify(net.pubkey(), round, prev, sig)
    except VerificationError as e:
        log.info("verification error: %s", e)
        typer.echo(f"Error during verification: {e}", err=True)
        raise typer.Exit(code=EXIT_ERROR)

    if not valid:
        typer.echo("Verification failed")
        raise typer.Exit(code=EXIT_INVALID)

    typer.echo("Verification succeeded")
    typer.echo(f"Randomness: {derive_randomness(sig).hex()}")
    raise typer.Exit(code=EXIT_VALID)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command on `argv` (default: sys.argv[1:]) and return the exit code."""
    cfg = load_config()
    try:
        cfg.validate()
    except ValueError as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        return EXIT_USAGE
    dlog.configure(json=cfg.log_format == "json", level=cfg.log_level, stream=sys.stderr)
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        rc = app(args=args, standalone_mode=False, prog_name="drand-verify")
    except _UsageError as e:
        typer.echo(f"Error: {e.format_message()}", err=True)
        typer.echo(
            "Must be called with 3 arguments (round, previous_signature, signature)", err=True
        )
        return EXIT_USAGE
    return int(rc or 0)


def main() -> None:  # pragma: no cover
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        typer.echo("", err=True)
        sys.exit(130)


if __name__ == "__main__":  # pragma: no cover
    main()
