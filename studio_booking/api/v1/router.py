from fastapi import APIRouter

# Public: bookings and calendar
from studio_booking.api.v1.public.bookings import router as bookings_router, location_bookings_router
from studio_booking.api.v1.public.calendar import router as calendar_router

# Admin: catalog
from studio_booking.api.v1.admin.locations import router as locations_router
from studio_booking.api.v1.admin.rooms import router as location_rooms_router, room_router
from studio_booking.api.v1.admin.providers import (
    router as location_providers_router,
    provider_router,
)
from studio_booking.api.v1.admin.duration_options import (
    router as location_options_router,
    option_router,
)
from studio_booking.api.v1.admin.upgrades import router as upgrades_router

# Admin: pricing and billing
from studio_booking.api.v1.admin.prices import room_price_router, upgrade_price_router
from studio_booking.api.v1.admin.price_tiers import router as price_tiers_router
from studio_booking.api.v1.admin.billings import router as billings_router

api_router = APIRouter()

# --- Public ---
api_router.include_router(bookings_router)
api_router.include_router(location_bookings_router)
api_router.include_router(calendar_router)

# --- Admin: catalog ---
api_router.include_router(locations_router)
api_router.include_router(location_rooms_router)
api_router.include_router(room_router)
api_router.include_router(location_providers_router)
api_router.include_router(provider_router)
api_router.include_router(location_options_router)
api_router.include_router(option_router)
api_router.include_router(upgrades_router)

# --- Admin: pricing & billing ---
api_router.include_router(room_price_router)
api_router.include_router(upgrade_price_router)
api_router.include_router(price_tiers_router)
api_router.include_router(billings_router)
