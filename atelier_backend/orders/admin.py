# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderStyleImage, Payment


class PaymentInline(admin.TabularInline):
    """Payments are ledger rows: visible, never edited in place."""

    model = Payment
    extra = 0
    can_delete = False
    readonly_fields = ("amount", "notes", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


class OrderStyleImageInline(admin.TabularInline):
    model = OrderStyleImage
    extra = 0
    raw_id_fields = ("style_image",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "client", "price", "currency", "status", "due_date", "admin")
    list_filter = ("status", "currency")
    search_fields = ("order_number", "client__name")
    raw_id_fields = ("admin", "client", "project", "event")
    readonly_fields = ("order_number", "price", "deposit", "created_at", "updated_at")
    inlines = [PaymentInline, OrderStyleImageInline]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("order", "amount", "created_at")
    readonly_fields = ("order", "amount", "notes", "created_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
