from django.contrib import admin

from backend.cache import query_cache
from backend.types import Principal
from .models import User


@admin.action(description="Clear cached backend queries")
def clear_cached_queries(modeladmin, request, queryset):
    for user in queryset:
        query_cache.clear_principal(Principal(user.principal))
    modeladmin.message_user(request, f"Cleared cached queries for {queryset.count()} user(s).")


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "principal", "is_active", "is_staff", "last_login")
    list_filter = ("is_active", "is_staff")
    search_fields = ("email", "principal", "first_name", "last_name")
    readonly_fields = ("principal", "last_login", "date_joined")
    actions = [clear_cached_queries]
