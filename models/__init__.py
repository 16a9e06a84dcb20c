from .user import User
from .producer import Producer
from .receiver import Receiver
from .product import Product
from .application import Application
from .contract import Contract
from .byte_exchange_rate import ByteExchangeRate


__all__ = ["User", "Producer", "Receiver", "Product", "Application", "Contract", "ByteExchangeRate"]
