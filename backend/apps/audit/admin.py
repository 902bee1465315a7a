"""Admin configuration for audit app."""

from django.contrib import admin

from apps.audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Read-only admin for AuditLog entries."""

    list_display = ["timestamp", "action", "performed_by_username", "target_username"]
    list_filter = ["action"]
    search_fields = ["performed_by_uid", "performed_by_username", "target_uid", "target_username"]
    ordering = ["-timestamp"]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
