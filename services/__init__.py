from .email_client import EmailClient
from .wallet_client import WalletClient

__all__ = ["EmailClient", "WalletClient"]
