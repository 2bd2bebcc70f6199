from django.contrib import admin

from ticketing.models import Booking, Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "venue", "starts_at", "total_seats", "available_seats"]
    search_fields = ["title", "venue"]

    def get_exclude(self, request, obj=None):
        # Seats are set from total_seats on creation and owned by bookings after.
        return ["available_seats"] if obj is None else []

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return []
        return ["total_seats", "available_seats"]

    def save_model(self, request, obj, form, change):
        if not change:
            obj.available_seats = obj.total_seats
        super().save_model(request, obj, form, change)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = [
        "reference_code",
        "event_id",
        "user_id",
        "number_of_seats",
        "status",
        "booked_at",
        "checked_in_at",
    ]
    list_filter = ["status"]
    search_fields = ["reference_code", "user_id"]

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
