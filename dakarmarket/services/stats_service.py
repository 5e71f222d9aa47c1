# dakarmarket/services/stats_service.py
from typing import Any, Dict

from ..models import Role
from .cart_service import CartService, FavoriteService
from .message_service import MessageService
from .order_service import OrderService
from .product_service import ProductService


class StatsService:
    """Números do painel, conforme o papel do usuário"""

    @staticmethod
    def dashboard(user_id: str, role: Role) -> Dict[str, Any]:
        stats = {
            "role": role.value,
            "total_orders": OrderService.status_counts(user_id, role)["all"],
            "unread_messages": MessageService.unread_count(user_id),
        }
        if role is Role.MERCHANT:
            stats["total_products"] = ProductService.count_for(user_id)
            stats["revenue"] = float(OrderService.revenue(user_id))
        else:
            stats["cart_items"] = CartService.count(user_id)
            stats["favorites"] = FavoriteService.count(user_id)
        return stats
