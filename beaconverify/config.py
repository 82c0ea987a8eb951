"""
Beacon verification configuration.

This file defines typed configuration objects and helpers for:
- The signing scheme of the beacon being verified (message format, DST, hash)
- The transport client (node URL, chain hash, per-request timeout)
- An optional pinned distributed public key

It provides:
- Dataclass-based configs with validation
- Loading from environment variables (prefix configurable)
- Loading from a JSON or YAML file
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import yaml

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_RANDOMNESS_HASH,
    DEFAULT_TIMEOUT_S,
    DST_G2_BASIC,
    MESSAGE_FORMAT_CONCAT,
    MESSAGE_FORMATS,
    PUBLIC_KEY_SIZE,
    RANDOMNESS_HASHES,
    SCHEME_CHAINED,
)
from .scheme import Scheme
from .utils.bytes import from_hex

# -------------------------
# Sub-configs
# -------------------------


@dataclass
class SchemeConfig:
    """
    Parameters of the beacon's signing scheme.

    scheme_id: identifier published by the beacon node (documentation aid)
    message_format: "concat" (u64be(round) || prev) or "sha256" (SHA-256(prev || u64be(round)))
    dst: hash-to-curve domain separation tag (ASCII)
    randomness_hash: 64-byte extractor applied to the signature
    """

    scheme_id: str = SCHEME_CHAINED
    message_format: str = MESSAGE_FORMAT_CONCAT
    dst: str = DST_G2_BASIC.decode("ascii")
    randomness_hash: str = DEFAULT_RANDOMNESS_HASH

    def validate(self) -> None:
        if self.message_format not in MESSAGE_FORMATS:
            raise ValueError(f"Unsupported message format: {self.message_format}")
        if self.randomness_hash not in RANDOMNESS_HASHES:
            raise ValueError(f"Unsupported randomness hash: {self.randomness_hash}")
        if not self.dst:
            raise ValueError("dst must be non-empty")
        try:
            self.dst.encode("ascii")
        except UnicodeEncodeError as e:
            raise ValueError("dst must be ASCII") from e

    def to_scheme(self) -> Scheme:
        self.validate()
        return Scheme(
            scheme_id=self.scheme_id,
            message_format=self.message_format,
            dst=self.dst.encode("ascii"),
            randomness_hash=self.randomness_hash,
        )


@dataclass
class ClientConfig:
    """
    Where and how to reach a beacon node.

    base_url: HTTP(S) root of the node API
    chain_hash: optional chain hash for nodes serving several beacons
    timeout_s: per-request deadline; the client never retries
    """

    base_url: str = DEFAULT_BASE_URL
    chain_hash: Optional[str] = None
    timeout_s: float = DEFAULT_TIMEOUT_S

    def validate(self) -> None:
        u = urlparse(self.base_url)
        if u.scheme not in {"http", "https"} or not u.netloc:
            raise ValueError("base_url must be an http(s) URL")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        if self.chain_hash is not None:
            try:
                from_hex(self.chain_hash)
            except ValueError as e:
                raise ValueError("chain_hash must be hex") from e


# -------------------------
# Top-level config
# -------------------------


@dataclass
class BeaconConfig:
    """
    scheme: signing scheme parameters
    client: transport parameters
    public_key: optional pinned distributed key (hex); when set it is used
                instead of the key advertised by the node, which is not fetched
    """

    scheme: SchemeConfig = field(default_factory=SchemeConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    public_key: Optional[str] = None

    def validate(self) -> None:
        self.scheme.validate()
        self.client.validate()
        if self.public_key is not None:
            try:
                pk = from_hex(self.public_key)
            except ValueError as e:
                raise ValueError("public_key must be hex") from e
            if len(pk) != PUBLIC_KEY_SIZE:
                raise ValueError(f"public_key must be {PUBLIC_KEY_SIZE} bytes, got {len(pk)}")

    # -------------------------
    # Serialization helpers
    # -------------------------

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    # -------------------------
    # Loaders
    # -------------------------

    @staticmethod
    def from_env(prefix: str = "BEACONVERIFY_") -> "BeaconConfig":
        """
        Load configuration from environment variables. All variables are optional.

        Supported keys (examples):
          - BEACONVERIFY_SCHEME_ID=pedersen-bls-chained
          - BEACONVERIFY_MESSAGE_FORMAT=concat
          - BEACONVERIFY_DST=BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_
          - BEACONVERIFY_RANDOMNESS_HASH=sha512

          - BEACONVERIFY_URL=http://127.0.0.1:8081
          - BEACONVERIFY_CHAIN_HASH=8990e7a9...
          - BEACONVERIFY_TIMEOUT_S=1.0

          - BEACONVERIFY_PUBLIC_KEY=868f005e...
        """

        def _get(name: str, cast: Any, default: Any) -> Any:
            key = prefix + name
            raw = os.getenv(key)
            if raw is None:
                return default
            try:
                return cast(raw)
            except Exception as e:
                raise ValueError(f"Invalid value for {key}: {raw!r}") from e

        defaults = SchemeConfig()
        cfg = BeaconConfig(
            scheme=SchemeConfig(
                scheme_id=_get("SCHEME_ID", str, defaults.scheme_id),
                message_format=_get("MESSAGE_FORMAT", str, defaults.message_format),
                dst=_get("DST", str, defaults.dst),
                randomness_hash=_get("RANDOMNESS_HASH", str, defaults.randomness_hash),
            ),
            client=ClientConfig(
                base_url=_get("URL", str, DEFAULT_BASE_URL),
                chain_hash=_get("CHAIN_HASH", str, None),
                timeout_s=_get("TIMEOUT_S", float, DEFAULT_TIMEOUT_S),
            ),
            public_key=_get("PUBLIC_KEY", str, None),
        )
        cfg.validate()
        return cfg

    @staticmethod
    def from_file(path: str) -> "BeaconConfig":
        """
        Load configuration from a JSON or YAML file. Keys mirror the dataclass
        structure. Example (YAML):

            scheme:
              scheme_id: pedersen-bls-chained
              message_format: concat
              randomness_hash: sha512
            client:
              base_url: "http://127.0.0.1:8081"
              timeout_s: 1.0
            public_key: "868f005e..."
        """
        text = _read_text(path)
        data = _parse_json_or_yaml(text, path)
        if not isinstance(data, dict):
            raise ValueError(f"{path!r} must contain a mapping at the top level")

        scheme_d = _section(data, "scheme", path)
        client_d = _section(data, "client", path)
        defaults = SchemeConfig()

        cfg = BeaconConfig(
            scheme=SchemeConfig(
                scheme_id=scheme_d.get("scheme_id", defaults.scheme_id),
                message_format=scheme_d.get("message_format", defaults.message_format),
                dst=scheme_d.get("dst", defaults.dst),
                randomness_hash=scheme_d.get("randomness_hash", defaults.randomness_hash),
            ),
            client=ClientConfig(
                base_url=client_d.get("base_url", DEFAULT_BASE_URL),
                chain_hash=client_d.get("chain_hash"),
                timeout_s=float(client_d.get("timeout_s", DEFAULT_TIMEOUT_S)),
            ),
            public_key=data.get("public_key"),
        )
        cfg.validate()
        return cfg


# -------------------------
# Utilities
# -------------------------


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _section(data: Dict[str, Any], key: str, path_hint: str) -> Dict[str, Any]:
    v = data.get(key) or {}
    if not isinstance(v, dict):
        raise ValueError(f"{path_hint!r}: section '{key}' must be a mapping")
    return v


def _parse_json_or_yaml(text: str, path_hint: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ValueError(
            f"Failed to parse {path_hint!r} as JSON or YAML. Original error: {e}"
        ) from e


DEFAULT: BeaconConfig = BeaconConfig()


__all__ = [
    "SchemeConfig",
    "ClientConfig",
    "BeaconConfig",
    "DEFAULT",
]
