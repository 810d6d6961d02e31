from django.contrib import admin
from .models import Landlord, Property


@admin.register(Landlord)
class LandlordAdmin(admin.ModelAdmin):
    list_display = ('name', 'owner_user', 'created_at')
    search_fields = ('name', 'owner_user__username')
    readonly_fields = ('created_at',)


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ('name', 'landlord', 'default_lease_document', 'revision', 'updated_at')
    list_filter = ('landlord',)
    search_fields = ('name', 'address', 'landlord__name')
    readonly_fields = ('revision', 'created_at', 'updated_at')
