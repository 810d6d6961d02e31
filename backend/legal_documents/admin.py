from django.contrib import admin
from .models import LegalDocument, SignatureField


class SignatureFieldInline(admin.TabularInline):
    """Read-only: field lists are replaced only through FieldService.save_fields."""
    model = SignatureField
    extra = 0
    can_delete = False
    fields = (
        'position', 'key', 'field_type', 'role', 'label', 'required',
        'page_number', 'x_pct', 'y_pct', 'width_pct', 'height_pct'
    )
    readonly_fields = fields
    ordering = ('position',)

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LegalDocument)
class LegalDocumentAdmin(admin.ModelAdmin):
    list_display = ('name', 'landlord', 'type', 'fields_configured', 'is_active', 'created_at')
    list_filter = ('type', 'fields_configured', 'is_template', 'is_active')
    search_fields = ('name', 'landlord__name')
    readonly_fields = (
        'file_type', 'file_size', 'page_count',
        'fields_configured', 'fields_saved_at', 'revision',
        'created_at', 'updated_at'
    )
    inlines = [SignatureFieldInline]
    fieldsets = (
        ('Document Info', {
            'fields': ('landlord', 'name', 'type', 'category', 'state', 'description')
        }),
        ('File', {
            'fields': ('file', 'file_type', 'file_size', 'page_count')
        }),
        ('Status', {
            'fields': ('is_template', 'is_active', 'fields_configured', 'fields_saved_at', 'revision')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
