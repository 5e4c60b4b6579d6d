"""HTTP collaborators: the wallet-custody backend and the read-only RPC.

Both live outside the generation core and are never awaited by it.
"""

from contractwiz.clients.chain import (
    ChainQueryClient,
    ConnectionStatus,
    RpcResult,
    format_units,
    parse_quantity,
)
from contractwiz.clients.wallet import (
    ContractCallRequest,
    TransactionRecord,
    Wallet,
    WalletServiceClient,
    WalletServiceResponse,
)

__all__ = [
    "ChainQueryClient",
    "ConnectionStatus",
    "ContractCallRequest",
    "RpcResult",
    "TransactionRecord",
    "Wallet",
    "WalletServiceClient",
    "WalletServiceResponse",
    "format_units",
    "parse_quantity",
]
