"""Admin configuration for inspections app."""

from django.contrib import admin

from apps.inspections.models import Inspection, InspectionPhoto, InspectionStatusLog


class InspectionPhotoInline(admin.TabularInline):
    model = InspectionPhoto
    extra = 0
    readonly_fields = ["storage_key", "url", "content_type", "size_bytes", "width", "height", "created_at"]


class InspectionStatusLogInline(admin.TabularInline):
    model = InspectionStatusLog
    extra = 0
    can_delete = False
    readonly_fields = ["old_status", "new_status", "changed_by", "timestamp"]

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Inspection)
class InspectionAdmin(admin.ModelAdmin):
    """Admin for Inspection model."""

    list_display = ["id", "inspector_name", "equipment", "status", "inspection_date", "inspector_deleted"]
    list_filter = ["status", "inspector_deleted"]
    search_fields = ["inspector_name", "original_inspector_name", "equipment__tag_number"]
    readonly_fields = [
        "inspector_deleted",
        "inspector_deleted_at",
        "original_inspector_name",
        "original_inspector_id",
        "original_inspector_email",
        "created_at",
        "updated_at",
    ]
    inlines = [InspectionPhotoInline, InspectionStatusLogInline]
    ordering = ["-created_at"]
