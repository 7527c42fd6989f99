# clients/admin.py

from django.contrib import admin

from clients.models import Client, Event, EventClient, Project, StyleImage


class EventClientInline(admin.TabularInline):
    model = EventClient
    extra = 0
    raw_id_fields = ("client",)


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "admin", "created_at")
    search_fields = ("name", "email", "phone")
    raw_id_fields = ("admin",)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("name", "client", "status", "due_date", "admin")
    list_filter = ("status",)
    search_fields = ("name",)
    raw_id_fields = ("admin", "client")


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("name", "event_date", "location", "admin")
    search_fields = ("name", "location")
    raw_id_fields = ("admin",)
    inlines = [EventClientInline]


@admin.register(StyleImage)
class StyleImageAdmin(admin.ModelAdmin):
    list_display = ("image_url", "category", "client", "admin", "created_at")
    list_filter = ("category",)
    raw_id_fields = ("admin", "client")
