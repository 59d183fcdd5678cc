"""HTTP and chain API clients."""

from payment_webhook_watcher.clients.chain_source import ITransactionSource
from payment_webhook_watcher.clients.etherscan import EtherscanClient
from payment_webhook_watcher.clients.http import AsyncHttpClient
from payment_webhook_watcher.clients.toncenter import TonCenterClient

__all__ = [
    "AsyncHttpClient",
    "EtherscanClient",
    "ITransactionSource",
    "TonCenterClient",
]
