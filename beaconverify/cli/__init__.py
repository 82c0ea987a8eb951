"""
beaconverify.cli
----------------

Command line front-end: fetch a beacon round from a node, verify it against
the distributed public key and print the valid random number.

Commands:
  - info    : Show the node's chain info (distributed key, period, scheme).
  - get     : Fetch a round (latest by default), verify it, print the randomness.
  - verify  : Verify a round record JSON file offline against a public key.

Exit codes: 0 valid, 1 verification failure, 2 transport / input error.

Environment:
  BEACONVERIFY_URL, BEACONVERIFY_CHAIN_HASH, BEACONVERIFY_TIMEOUT_S,
  BEACONVERIFY_PUBLIC_KEY and the scheme keys read by
  `beaconverify.config.BeaconConfig.from_env`.

Example:
  beaconverify get --url http://127.0.0.1:8081
  beaconverify verify round.json --key 868f005e...
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence

import typer

from ..beacon.verifier import RoundVerifier
from ..client.http import BeaconClient
from ..config import BeaconConfig
from ..errors import TransportError, VerifyFailure
from ..types.core import RoundRecord, Valid

__all__ = ["app", "main"]

logger = logging.getLogger(__name__)

EXIT_INVALID = 1
EXIT_ERROR = 2

app = typer.Typer(
    name="beaconverify",
    help="Fetch and verify randomness beacon rounds.",
    no_args_is_help=True,
    add_completion=False,
)


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _parse_log_level(value: str) -> str:
    level = value.upper()
    if level not in _LOG_LEVELS:
        raise typer.BadParameter(f"expected one of: {', '.join(_LOG_LEVELS)}")
    return level


@app.callback()
def _root(
    log_level: str = typer.Option(
        "INFO", "--log-level", callback=_parse_log_level, help="Python logging level."
    ),
) -> None:
    logging.basicConfig(
        level=logging.getLevelName(log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# -----------------------
# Helpers
# -----------------------


def _load_config(
    config: Optional[str],
    url: Optional[str],
    chain_hash: Optional[str],
    timeout: Optional[float],
) -> BeaconConfig:
    try:
        cfg = BeaconConfig.from_file(config) if config else BeaconConfig.from_env()
        if url is not None:
            cfg.client.base_url = url
        if chain_hash is not None:
            cfg.client.chain_hash = chain_hash
        if timeout is not None:
            cfg.client.timeout_s = timeout
        cfg.validate()
    except (OSError, TypeError, ValueError) as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(EXIT_ERROR)
    return cfg


def _emit(obj: Dict[str, Any], pretty: bool) -> None:
    typer.echo(json.dumps(obj, indent=2 if pretty else None))


def _failure_dict(f: VerifyFailure) -> Dict[str, Any]:
    return {"valid": False, "kind": f.kind, "detail": str(f)}


def _valid_dict(v: Valid) -> Dict[str, Any]:
    return {"valid": True, **v.to_dict()}


def _opt_config() -> Any:
    return typer.Option(None, "--config", "-c", help="JSON/YAML config file.")


def _opt_url() -> Any:
    return typer.Option(None, "--url", help="Beacon node base URL.")


def _opt_chain_hash() -> Any:
    return typer.Option(None, "--chain-hash", help="Chain hash for multi-chain nodes.")


def _opt_timeout() -> Any:
    return typer.Option(None, "--timeout", help="Per-request timeout in seconds.")


def _opt_pretty() -> Any:
    return typer.Option(True, "--pretty/--no-pretty", help="Pretty-print JSON output.")


# -----------------------
# Commands
# -----------------------


@app.command("info")
def cmd_info(
    config: Optional[str] = _opt_config(),
    url: Optional[str] = _opt_url(),
    chain_hash: Optional[str] = _opt_chain_hash(),
    timeout: Optional[float] = _opt_timeout(),
    pretty: bool = _opt_pretty(),
) -> None:
    """Show the node's chain info."""
    cfg = _load_config(config, url, chain_hash, timeout)
    try:
        with BeaconClient.from_config(cfg) as c:
            info = c.get_chain_info()
    except TransportError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_ERROR)
    _emit(
        {
            "public_key": info.public_key_hex,
            "period": info.period,
            "genesis_time": info.genesis_time,
            "hash": info.hash,
            "scheme_id": info.scheme_id,
        },
        pretty,
    )


@app.command("get")
def cmd_get(
    round_id: Optional[int] = typer.Option(None, "--round", "-r", min=0, help="Round to fetch (default: latest)."),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Distributed public key (hex). Fetched from the node if omitted."),
    config: Optional[str] = _opt_config(),
    url: Optional[str] = _opt_url(),
    chain_hash: Optional[str] = _opt_chain_hash(),
    timeout: Optional[float] = _opt_timeout(),
    pretty: bool = _opt_pretty(),
) -> None:
    """Fetch a round, verify it and print the randomness."""
    cfg = _load_config(config, url, chain_hash, timeout)
    try:
        with BeaconClient.from_config(cfg) as c:
            dist_key = key or cfg.public_key or c.get_dist_key()
            rnd = c.get_randomness(dist_key, round_id)
    except TransportError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_ERROR)
    except VerifyFailure as f:
        _emit(_failure_dict(f), pretty)
        raise typer.Exit(EXIT_INVALID)

    logger.info("Valid Random Number: round=%d %s", rnd.index, rnd.value.hex())
    _emit(_valid_dict(rnd), pretty)


@app.command("verify")
def cmd_verify(
    record_file: str = typer.Argument(..., help="Round record JSON (or '-' for stdin)."),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Distributed public key (hex)."),
    config: Optional[str] = _opt_config(),
    pretty: bool = _opt_pretty(),
) -> None:
    """Verify a round record offline."""
    cfg = _load_config(config, None, None, None)
    dist_key = key or cfg.public_key
    if not dist_key:
        typer.echo("A public key is required (--key or BEACONVERIFY_PUBLIC_KEY).", err=True)
        raise typer.Exit(EXIT_ERROR)

    try:
        if record_file == "-":
            text = sys.stdin.read()
        else:
            with open(record_file, "r", encoding="utf-8") as f:
                text = f.read()
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON must be an object")
        record = RoundRecord.from_dict(data)
    except (OSError, KeyError, TypeError, ValueError) as e:
        typer.echo(f"Invalid round record: {e}", err=True)
        raise typer.Exit(EXIT_ERROR)

    result = RoundVerifier(cfg.scheme.to_scheme()).verify_record(dist_key, record)
    if isinstance(result, VerifyFailure):
        _emit(_failure_dict(result), pretty)
        raise typer.Exit(EXIT_INVALID)
    _emit(_valid_dict(result), pretty)


def main(argv: Optional[Sequence[str]] = None) -> None:  # pragma: no cover - thin wrapper
    """Entry-point for the `beaconverify` console script and `python -m beaconverify.cli`."""
    try:
        app(args=list(argv) if argv is not None else None, prog_name="beaconverify")
    except KeyboardInterrupt:
        typer.echo("", err=True)
        sys.exit(130)
