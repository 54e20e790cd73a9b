# purchase_indexer/core/config.py

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

import msgspec
import yaml
from dotenv import load_dotenv
from msgspec import Struct

from ..types import NetworkConfig, RpcConfig, ScanConfig
from .exceptions import ConfigurationError
from .logging import IndexerLogger, log_with_context
from .registry import NetworkRegistry


ENV_PREFIX = "PURCHASE_INDEXER_"
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "networks.yaml"


class IndexerConfig(Struct, frozen=True):
    networks: List[NetworkConfig]
    rpc: RpcConfig = msgspec.field(default_factory=RpcConfig)
    scan: ScanConfig = msgspec.field(default_factory=ScanConfig)
    log_level: str = "INFO"

    @classmethod
    def from_file(cls, config_path: Optional[Union[str, Path]] = None,
                  env_vars: Optional[Dict[str, str]] = None) -> 'IndexerConfig':
        logger = IndexerLogger.get_logger('core.config')

        if env_vars is None:
            load_dotenv()
            env_vars = dict(os.environ)

        path = Path(config_path) if config_path else Path(
            env_vars.get(f"{ENV_PREFIX}CONFIG", DEFAULT_CONFIG_PATH)
        )
        raw = cls._read_file(path)
        raw = cls._apply_env_overrides(raw, env_vars)

        try:
            config = msgspec.convert(raw, cls)
        except (msgspec.ValidationError, ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

        # builds the registry once to surface duplicate keys or chain ids early
        config.registry()

        log_with_context(logger, logging.INFO, "Configuration loaded",
                         network_count=len(config.networks))
        return config

    @staticmethod
    def _read_file(path: Path) -> dict:
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        try:
            with open(path, 'r') as f:
                if path.suffix.lower() in ('.yaml', '.yml'):
                    data = yaml.safe_load(f)
                elif path.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    raise ConfigurationError(f"Unsupported config file type: {path.suffix}")
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def _apply_env_overrides(raw: dict, env_vars: Dict[str, str]) -> dict:
        raw = dict(raw)

        networks = []
        for network in raw.get('networks') or []:
            if isinstance(network, dict) and network.get('key'):
                env_key = f"{ENV_PREFIX}RPC_{str(network['key']).upper().replace('-', '_')}"
                if env_vars.get(env_key):
                    network = {**network, 'rpc_url': env_vars[env_key]}
            networks.append(network)
        raw['networks'] = networks

        if env_vars.get(f"{ENV_PREFIX}LOG_LEVEL"):
            raw['log_level'] = env_vars[f"{ENV_PREFIX}LOG_LEVEL"]

        return raw

    def registry(self) -> NetworkRegistry:
        return NetworkRegistry(self.networks)
