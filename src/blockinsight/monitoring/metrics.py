# File: src/blockinsight/monitoring/metrics.py

import logging
from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

# Cache metrics, labelled by cache name ("block" or "summary")
cache_hits = Counter('explorer_cache_hits', 'Cache lookups answered from memory', ['cache'])
cache_misses = Counter('explorer_cache_misses', 'Cache lookups that went to the node', ['cache'])
cache_stores = Counter('explorer_cache_stores', 'Entries admitted to a cache', ['cache'])

# Node metrics
rpc_calls = Counter('explorer_rpc_calls', 'JSON-RPC calls issued to the node', ['method'])
summary_build_time = Histogram('explorer_summary_build_seconds', 'Time to build one block summary from the node')


def start_metrics_server(port: int) -> None:
    """Expose metrics over HTTP; a port of 0 disables the exporter."""
    if not port:
        return
    start_http_server(port)
    logger.info(f"Metrics exporter listening on port {port}")
