# products/filters.py

import django_filters

from products.models import Product


class ProductFilter(django_filters.FilterSet):
    """
    ?store=<uuid>&category=<text>&platform=true&min_price=&max_price=
    """

    category = django_filters.CharFilter(method="filter_category")
    platform = django_filters.BooleanFilter(field_name="store", lookup_expr="isnull")
    min_price = django_filters.NumberFilter(field_name="final_price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="final_price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["store", "is_available", "is_active", "brand"]

    def filter_category(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(categories__icontains=value)
