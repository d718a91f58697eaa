from django.contrib import admin

from .models import ActivityLog, Merchant, MerchantProductApproval


class MerchantProductApprovalInline(admin.TabularInline):
    model = MerchantProductApproval
    extra = 0
    fields = ("product_name", "product_url")


@admin.register(Merchant)
class MerchantAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "shopify_status", "products_uploaded_count", "last_updated_at")
    list_filter = ("shopify_status", "submission_type", "selection_mode")
    search_fields = ("name", "email", "contact_name")
    readonly_fields = ("last_updated_at", "uploaded_at", "created_at")
    raw_id_fields = ("last_updated_by", "uploaded_by")
    inlines = [MerchantProductApprovalInline]


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ("merchant", "type", "user", "created_at")
    list_filter = ("type",)
    search_fields = ("message", "merchant__name")
    raw_id_fields = ("merchant", "user")

    def has_change_permission(self, request, obj=None):
        return False
