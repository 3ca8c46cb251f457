from studio_booking.models.location import Location
from studio_booking.models.room import Room
from studio_booking.models.service_provider import ServiceProvider
from studio_booking.models.duration_option import DurationOption
from studio_booking.models.upgrade import Upgrade
from studio_booking.models.price import PriceType, RoomPrice, RoomPriceTier, UpgradePrice
from studio_booking.models.booking import Booking, BookingUpgrade
from studio_booking.models.billing import Billing, BillingItem, BillingItemUpgrade
