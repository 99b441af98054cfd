from django.contrib import admin

from messaging.models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("store", "sender", "receiver", "sender_role", "is_read", "created_at")
    list_filter = ("sender_role", "is_read")
    search_fields = ("message", "store__name", "sender__email", "receiver__email")
    list_select_related = ("store", "sender", "receiver")
