from studio_booking.schemas.common import PaginatedResponse, ErrorResponse, DeleteResult, BookingCount
from studio_booking.schemas.location import Location, LocationCreate
from studio_booking.schemas.room import Room, RoomCreate, RoomUpdate, RoomSummary
from studio_booking.schemas.provider import Provider, ProviderCreate, ProviderUpdate, ProviderSummary
from studio_booking.schemas.duration_option import (
    DurationOption, DurationOptionCreate, DurationOptionUpdate,
)
from studio_booking.schemas.upgrade import Upgrade, UpgradeCreate, UpgradeUpdate
from studio_booking.schemas.price import (
    Price, PriceCreate, RoomPrice, UpgradePrice,
    PriceTier, PriceTierIn, PriceTierReplace, PricePreview, PricePreviewEntry,
)
from studio_booking.schemas.booking import (
    Booking, BookingCreate, BookingUpdate, BookingUpgrade, BookingUpgradeIn, BookingListItem,
)
from studio_booking.schemas.billing import Billing, BillingCreate, BillingItem, BillingItemUpgrade
from studio_booking.schemas.calendar import CalendarDay, CalendarRoom
