# dakarmarket/blueprints/serializers.py
from ..models import CartItem, Favorite, Message, Order, Product, Profile
from ..services.threads import ThreadSummary


def _iso(dt):
    return dt.isoformat() if dt else None


def _money(value) -> float:
    return float(value) if value is not None else 0.0


def profile_to_dict(p: Profile, private: bool = False):
    data = {
        "id": p.id,
        "display_name": p.display_name,
        "avatar_url": p.avatar_url,
        "role": p.role,
        "whatsapp_number": p.whatsapp_number,
    }
    if private:
        data |= {"email": p.email, "phone": p.phone, "created_at": _iso(p.created_at)}
    return data


def product_to_dict(p: Product):
    return {
        "id": p.id,
        "user_id": p.user_id,
        "title": p.title,
        "description": p.description or "",
        "price": _money(p.price),
        "image_url": p.image_url,
        "category": p.category,
        "created_at": _iso(p.created_at),
        "updated_at": _iso(p.updated_at),
    }


def cart_item_to_dict(item: CartItem):
    return {
        "id": item.id,
        "product_id": item.product_id,
        "quantity": item.quantity,
        "product": product_to_dict(item.product) if item.product else None,
        "subtotal": _money(item.product.price) * item.quantity if item.product else 0.0,
    }


def favorite_to_dict(f: Favorite):
    return {
        "id": f.id,
        "product_id": f.product_id,
        "product": product_to_dict(f.product) if f.product else None,
        "created_at": _iso(f.created_at),
    }


def order_to_dict(o: Order):
    return {
        "id": o.id,
        "client_id": o.client_id,
        "merchant_id": o.merchant_id,
        "product_id": o.product_id,
        "quantity": o.quantity,
        "total": _money(o.total),
        "status": o.status,
        "created_at": _iso(o.created_at),
        "updated_at": _iso(o.updated_at),
        "product": {"title": o.product.title, "price": _money(o.product.price), "image_url": o.product.image_url}
        if o.product else None,
        "client": {"display_name": o.client.display_name, "email": o.client.email} if o.client else None,
        "merchant": {"display_name": o.merchant.display_name, "email": o.merchant.email} if o.merchant else None,
    }


def message_to_dict(m: Message):
    return {
        "id": m.id,
        "from_user": m.from_user,
        "to_user": m.to_user,
        "content": m.content,
        "read": bool(m.read),
        "created_at": _iso(m.created_at),
    }


def thread_to_dict(t: ThreadSummary):
    return {
        "counterpart_id": t.counterpart_id,
        "counterpart": profile_to_dict(t.counterpart_profile) if t.counterpart_profile else None,
        "last_message": message_to_dict(t.last_message),
        "unread_count": t.unread_count,
    }
