# tests/test_config.py
import os

import yaml

from blockinsight.config.explorer_config import DEFAULT_POOLS_PATH, ExplorerConfig
from blockinsight.explorer.pools import PoolAttributor


class TestExplorerConfig:
    def test_creates_default_config(self, tmp_path):
        path = tmp_path / "conf" / "explorer.yaml"
        config = ExplorerConfig(str(path))

        assert os.path.exists(path)
        assert config.get("cache.block_size") == 1000
        assert config.get("cache.summary_size") == 1_000_000
        assert config.get("listing.limit") == 200
        assert config.get("missing.key", "fallback") == "fallback"

    def test_loads_existing_file(self, tmp_path):
        path = tmp_path / "explorer.yaml"
        path.write_text(yaml.dump({"rpc": {"url": "http://node:8232"}}))
        config = ExplorerConfig(str(path))
        assert config.get("rpc.url") == "http://node:8232"

    def test_update_persists(self, tmp_path):
        path = tmp_path / "explorer.yaml"
        ExplorerConfig(str(path)).update("listing.limit", 50)
        assert ExplorerConfig(str(path)).get("listing.limit") == 50

    def test_packaged_pool_table_loads(self):
        attributor = PoolAttributor.from_file(DEFAULT_POOLS_PATH)
        assert len(attributor) > 0

    def test_environment_overrides_rpc_credentials(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BLOCKINSIGHT_RPC_URL", "http://10.0.0.5:8232")
        monkeypatch.setenv("BLOCKINSIGHT_RPC_PASSWORD", "secret")
        config = ExplorerConfig(str(tmp_path / "explorer.yaml"))
        assert config.get("rpc.url") == "http://10.0.0.5:8232"
        assert config.get("rpc.password") == "secret"
        assert config.get("rpc.user") == "rpcuser"
