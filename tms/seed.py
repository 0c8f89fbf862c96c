"""
Demo data: two users and thirty shipments.

Loaded at startup when ``seed_demo_data`` is on. Demo passwords are
hashed on the way into the directory like any other.
"""

from __future__ import annotations

from tms.auth.capabilities import Role
from tms.auth.jwt import UserDirectory
from tms.core.models import Location, ShipmentInput, TrackingEvent
from tms.storage.shipments import ShipmentStore

DEMO_SHIPMENT_COUNT = 30

DEMO_USERS = [
    # (id, username, password, role)
    ("1", "admin", "admin123", Role.ADMIN),
    ("2", "employee", "employee123", Role.EMPLOYEE),
]


def tracking_events(pickup: Location, delivery: Location) -> list[TrackingEvent]:
    """Three-step history: picked up, through a hub, out for delivery."""
    hub = Location(city="Transit Hub", state=pickup.state, country=pickup.country)
    return [
        TrackingEvent(timestamp="2026-01-01T09:00:00Z", status="Picked up", location=pickup),
        TrackingEvent(timestamp="2026-01-02T14:30:00Z", status="In transit", location=hub),
        TrackingEvent(timestamp="2026-01-03T18:45:00Z", status="Out for delivery", location=delivery),
    ]


def demo_shipment(i: int) -> ShipmentInput:
    """The i-th demo shipment (1-based)."""
    pickup = Location(city="Dallas", state="TX", country="USA")
    delivery = Location(city="Atlanta", state="GA", country="USA")
    day = (i % 28) + 1

    return ShipmentInput(
        reference=f"REF-{1000 + i}",
        shipper_name="Acme Corp" if i % 2 == 0 else "Globex Logistics",
        carrier_name="FastTrack" if i % 3 == 0 else "BlueSky Freight",
        pickup_location=pickup,
        delivery_location=delivery,
        pickup_date=f"2026-01-{day:02d}",
        delivery_date=f"2026-02-{day:02d}",
        status="Delivered" if i % 4 == 0 else "In Transit",
        tracking_events=tracking_events(pickup, delivery),
        rate=1200 + i * 15,
        currency="USD",
        service_level="Express" if i % 2 == 0 else "Standard",
        is_flagged=i % 5 == 0,
    )


def seed_users(users: UserDirectory) -> None:
    for user_id, username, password, role in DEMO_USERS:
        users.add_user(user_id, username, password, role)


def seed_shipments(store: ShipmentStore, count: int = DEMO_SHIPMENT_COUNT) -> None:
    """Add demo shipments; on an empty store they get ids "1".."count"."""
    for i in range(1, count + 1):
        store.add(demo_shipment(i))
