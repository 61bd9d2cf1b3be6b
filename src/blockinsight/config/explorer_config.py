# File: src/blockinsight/config/explorer_config.py

import os
from pathlib import Path
from typing import Dict, Any

import yaml

from ..utils.config import Config

DEFAULT_POOLS_PATH = str(Path(__file__).with_name("pools.json"))

ENV_OVERRIDES = {
    "BLOCKINSIGHT_RPC_URL": "rpc.url",
    "BLOCKINSIGHT_RPC_USER": "rpc.user",
    "BLOCKINSIGHT_RPC_PASSWORD": "rpc.password",
}


class ExplorerConfig:
    def __init__(self, config_path: str = "config/explorer.yaml"):
        self.config_path = config_path
        self.config = self._load_config()
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Node credentials may come from the environment instead of the file"""
        for variable, key in ENV_OVERRIDES.items():
            value = os.environ.get(variable)
            if value:
                section, name = key.split(".")
                self.config.setdefault(section, {})[name] = value

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return self._create_default_config()
        
        with open(self.config_path, 'r') as f:
            return yaml.safe_load(f) or {}

    def _create_default_config(self) -> Dict[str, Any]:
        config = {
            "rpc": {
                "url": "http://127.0.0.1:8232",
                "user": "rpcuser",
                "password": "rpcpassword",
                "timeout": 30
            },
            "cache": {
                "block_size": Config.DEFAULT_BLOCK_CACHE_SIZE,
                "summary_size": Config.DEFAULT_BLOCK_SUMMARY_CACHE_SIZE
            },
            "listing": {
                "limit": Config.BLOCK_LIMIT
            },
            "pools": {
                "path": DEFAULT_POOLS_PATH
            },
            "server": {
                "host": "0.0.0.0",
                "port": 3001
            },
            "monitoring": {
                "metrics_port": 0,
                "log_dir": "logs",
                "log_level": "INFO"
            }
        }
        
        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.config_path, 'w') as f:
            yaml.dump(config, f)
        
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        try:
            keys = key.split('.')
            value = self.config
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def update(self, key: str, value: Any):
        """Update configuration value."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value
        
        with open(self.config_path, 'w') as f:
            yaml.dump(self.config, f)
