# src/blockinsight/cli/cli.py
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from ..blockchain.reward import get_block_reward
from ..config.explorer_config import ExplorerConfig
from ..utils.config import Config
from ..utils.logger import get_logger

logger = logging.getLogger(__name__)


class CLI:
    def __init__(self):
        self.config: Optional[ExplorerConfig] = None

    def main(self, args: List[str]) -> int:
        parser = self.create_parser()
        args = parser.parse_args(args)
        
        if not hasattr(args, 'func'):
            parser.print_help()
            return 1
            
        self.config = ExplorerConfig(args.config)
        if args.command != 'serve':
            # serve installs file and console handlers on the root logger instead
            get_logger('blockinsight', self.config.get('monitoring.log_level', 'INFO'))
        return args.func(args) or 0

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='blockinsight explorer CLI')
        parser.add_argument('--config', default='config/explorer.yaml', help='Path to YAML configuration')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        serve = subparsers.add_parser('serve', help='Run the explorer HTTP API')
        serve.add_argument('--host', help='Bind address (overrides config)')
        serve.add_argument('--port', type=int, help='Bind port (overrides config)')
        serve.set_defaults(func=self.serve)

        block = subparsers.add_parser('block', help='Show block detail')
        block.add_argument('hash', help='Block hash')
        block.set_defaults(func=self.show_block)

        blocks = subparsers.add_parser('blocks', help='List blocks of a UTC day')
        blocks.add_argument('--date', help='Day as yyyy-mm-dd (default: today)')
        blocks.add_argument('--start-timestamp', type=int, help='Upper bound for pagination')
        blocks.add_argument('--limit', type=int, help='Maximum number of blocks')
        blocks.set_defaults(func=self.list_blocks)

        reward = subparsers.add_parser('reward', help='Show block subsidy at a height')
        reward.add_argument('height', type=int, help='Block height')
        reward.set_defaults(func=self.show_reward)

        return parser

    def serve(self, args) -> int:
        import uvicorn
        from ..api.server import create_app
        from ..monitoring.logging_config import LogConfig
        from ..monitoring.metrics import start_metrics_server

        log_file = LogConfig.from_config(self.config).setup_logging()
        start_metrics_server(self.config.get('monitoring.metrics_port', 0))

        host = args.host or self.config.get('server.host', '0.0.0.0')
        port = args.port or self.config.get('server.port', 3001)
        logger.info(f"Starting explorer API on {host}:{port}, logging to {log_file}")
        uvicorn.run(create_app(self.config), host=host, port=port)
        return 0

    def show_block(self, args) -> int:
        block = self._run(lambda explorer: explorer.get_block(args.hash))
        if block is None:
            print("Not found", file=sys.stderr)
            return 1
        print(json.dumps(block.model_dump(mode='json'), indent=2))
        return 0

    def list_blocks(self, args) -> int:
        listing = self._run(lambda explorer: explorer.list_blocks(args.date, args.start_timestamp, args.limit))
        print(json.dumps(listing.model_dump(mode='json'), indent=2))
        return 0

    def show_reward(self, args) -> int:
        subsidy = get_block_reward(args.height)
        print(f"{subsidy / Config.COIN:.8f}")
        return 0

    def _run(self, action):
        from ..api.server import build_explorer, build_rpc_client

        async def runner():
            client = build_rpc_client(self.config)
            try:
                return await action(build_explorer(self.config, client))
            finally:
                await client.close()

        return asyncio.run(runner())


def main() -> None:
    sys.exit(CLI().main(sys.argv[1:]))
