"""DakarMarket: backend do marketplace (pedidos, carrinho, favoritos e mensagens)."""

__version__ = "0.3.0"
