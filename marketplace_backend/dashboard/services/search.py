"""
PATH: dashboard/services/search.py

Back-office global search across users, products, orders and stores.
Each source contributes at most PER_SOURCE_LIMIT hits; results are newest first.
An empty query returns no results.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db.models import Q

from orders.models import Order
from products.models import Product
from stores.models import Store

PER_SOURCE_LIMIT = 5


def _truncate(text: str, size: int = 100) -> str:
    text = text or ""
    return text if len(text) <= size else text[:size] + "..."


def global_search(query: str) -> list[dict]:
    query = (query or "").strip()
    if not query:
        return []

    User = get_user_model()
    results = []

    users = User.objects.filter(
        Q(email__icontains=query) | Q(full_name__icontains=query) | Q(username__icontains=query)
    ).order_by("-created_at")[:PER_SOURCE_LIMIT]
    for u in users:
        results.append(
            {
                "id": str(u.id),
                "type": "user",
                "title": u.full_name or u.email,
                "description": u.email,
                "url": f"/admin/users/{u.id}",
                "timestamp": u.created_at,
            }
        )

    products = Product.objects.filter(
        Q(title__icontains=query) | Q(asin__iexact=query) | Q(description__icontains=query)
    ).order_by("-created_at")[:PER_SOURCE_LIMIT]
    for p in products:
        results.append(
            {
                "id": str(p.id),
                "type": "product",
                "title": p.title,
                "description": _truncate(p.description),
                "url": f"/admin/products/{p.id}",
                "timestamp": p.created_at,
            }
        )

    orders = Order.objects.filter(
        Q(order_number__icontains=query) | Q(tracking_number__iexact=query)
    ).order_by("-created_at")[:PER_SOURCE_LIMIT]
    for o in orders:
        results.append(
            {
                "id": str(o.id),
                "type": "order",
                "title": f"Order #{o.order_number}",
                "description": f"Status: {o.status}",
                "url": f"/admin/orders/{o.id}",
                "timestamp": o.created_at,
            }
        )

    stores = Store.objects.filter(
        Q(name__icontains=query) | Q(slug__icontains=query)
    ).order_by("-created_at")[:PER_SOURCE_LIMIT]
    for s in stores:
        results.append(
            {
                "id": str(s.id),
                "type": "store",
                "title": s.name,
                "description": f"Status: {s.status}",
                "url": f"/admin/stores/{s.id}",
                "timestamp": s.created_at,
            }
        )

    results.sort(key=lambda r: r["timestamp"], reverse=True)
    return results
