from django.contrib import admin
from .models import (
    Beverage, Guest, GuestBeveragePreference, GuestToppingPreference, Party, Topping,
)


class GuestToppingPreferenceInline(admin.TabularInline):
    model = GuestToppingPreference
    extra = 0


class GuestBeveragePreferenceInline(admin.TabularInline):
    model = GuestBeveragePreference
    extra = 0


@admin.register(Party)
class PartyAdmin(admin.ModelAdmin):
    list_display = ('name', 'host_name', 'pizza_style', 'expected_guest_count', 'guest_count', 'starts_at')
    list_filter = ('pizza_style', 'created_at')
    search_fields = ('name', 'host_name')
    filter_horizontal = ('available_toppings', 'available_beverages')
    date_hierarchy = 'created_at'

    def guest_count(self, obj):
        return obj.guests.count()
    guest_count.short_description = 'RSVPs'


@admin.register(Guest)
class GuestAdmin(admin.ModelAdmin):
    list_display = ('name', 'party', 'dietary_restrictions', 'created_at')
    list_filter = ('party',)
    search_fields = ('name', 'party__name')
    inlines = [GuestToppingPreferenceInline, GuestBeveragePreferenceInline]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('party')


@admin.register(Topping)
class ToppingAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'category')
    list_filter = ('category',)
    search_fields = ('name', 'slug')


@admin.register(Beverage)
class BeverageAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'category')
    list_filter = ('category',)
    search_fields = ('name', 'slug')


@admin.register(GuestToppingPreference)
class GuestToppingPreferenceAdmin(admin.ModelAdmin):
    list_display = ('guest', 'topping', 'preference')
    list_filter = ('topping', 'preference')
    search_fields = ('guest__name', 'topping__name')


@admin.register(GuestBeveragePreference)
class GuestBeveragePreferenceAdmin(admin.ModelAdmin):
    list_display = ('guest', 'beverage', 'preference')
    list_filter = ('beverage', 'preference')
    search_fields = ('guest__name', 'beverage__name')
