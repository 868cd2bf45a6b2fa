"""Tells what to show in the Django admin interface for orders app"""

from django.contrib import admin
from .models import Order, OrderItem, DriverOrderRejection


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Order admin"""
    list_display = ['order_number', 'customer', 'status', 'delivery_status', 'assigned_driver', 'created_at']
    list_filter = ['status', 'delivery_status', 'created_at']
    search_fields = ['order_number', 'customer__username', 'shipping_address1', 'shipping_city']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    inlines = [OrderItemInline]


@admin.register(DriverOrderRejection)
class DriverOrderRejectionAdmin(admin.ModelAdmin):
    list_display = ("order", "driver", "created_at")
    search_fields = ("order__order_number", "driver__user__username")
