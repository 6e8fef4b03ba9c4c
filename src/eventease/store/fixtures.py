"""Seed data written to an empty store."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from eventease.models.records import utcnow

EVENTS_KEY = "eventease_events"
TICKET_TYPES_KEY = "eventease_ticket_types"
ATTENDEES_KEY = "eventease_attendees"
ANALYTICS_KEY = "eventease_analytics"
CAMPAIGNS_KEY = "eventease_campaigns"

COLLECTION_KEYS = (
    EVENTS_KEY,
    TICKET_TYPES_KEY,
    ATTENDEES_KEY,
    ANALYTICS_KEY,
    CAMPAIGNS_KEY,
)


def default_fixtures(now: datetime | None = None) -> dict[str, list[dict[str, Any]]]:
    """Build the fixture documents for every collection.

    Args:
        now: Reference time for relative timestamps (defaults to now)

    Returns:
        Mapping of collection key to its serialized records
    """
    now = now or utcnow()
    now_iso = now.isoformat()

    events = [
        {
            "id": "evt_1",
            "organizer_id": "organizer_user_1",
            "title": "Tech Innovation Summit 2024",
            "description": (
                "Join industry leaders for cutting-edge technology discussions and networking."
            ),
            "category": "technology",
            "date": "2024-03-15",
            "time": "09:00",
            "end_time": "18:00",
            "venue": {
                "name": "San Francisco Convention Center",
                "address": "747 Howard St, San Francisco, CA",
                "capacity": 500,
            },
            "image_url": "https://images.pexels.com/photos/3184291/pexels-photo-3184291.jpeg",
            "status": "published",
            "visibility": "public",
            "price": 299.0,
            "currency": "USD",
            "tags": ["innovation", "networking"],
            "created_at": "2024-01-01T00:00:00+00:00",
            "updated_at": now_iso,
        },
        {
            "id": "evt_2",
            "organizer_id": "organizer_user_1",
            "title": "Digital Marketing Workshop",
            "description": "Learn the latest digital marketing strategies from industry experts.",
            "category": "marketing",
            "date": "2024-03-22",
            "time": "10:00",
            "end_time": "16:00",
            "venue": {
                "name": "New York Business Center",
                "address": "",
                "capacity": 150,
            },
            "image_url": "https://images.pexels.com/photos/3861958/pexels-photo-3861958.jpeg",
            "status": "draft",
            "visibility": "public",
            "price": 199.0,
            "currency": "USD",
            "tags": [],
            "created_at": "2024-01-02T00:00:00+00:00",
            "updated_at": now_iso,
        },
    ]

    ticket_types = [
        {
            "id": "ticket_1",
            "event_id": "evt_1",
            "name": "Early Bird",
            "description": "Limited time early bird pricing",
            "price": 199.0,
            "currency": "USD",
            "quantity": 100,
            "sold": 85,
            "sale_start": "2024-01-01T00:00:00+00:00",
            "sale_end": "2024-02-15T23:59:59+00:00",
            "is_active": True,
            "benefits": ["Early access", "Welcome kit"],
            "restrictions": ["Non-refundable"],
            "created_at": "2024-01-01T00:00:00+00:00",
        },
        {
            "id": "ticket_2",
            "event_id": "evt_1",
            "name": "Regular",
            "description": "Standard conference ticket",
            "price": 299.0,
            "currency": "USD",
            "quantity": 400,
            "sold": 245,
            "sale_start": "2024-02-16T00:00:00+00:00",
            "sale_end": "2024-03-10T23:59:59+00:00",
            "is_active": True,
            "benefits": ["Access to all sessions"],
            "restrictions": ["Refundable until 7 days before"],
            "created_at": "2024-01-01T00:00:00+00:00",
        },
    ]

    analytics = [
        {
            "id": "analytics_1",
            "event_id": "evt_1",
            "views": 2450,
            "registrations": 330,
            "revenue": 89565.0,
            "top_referrers": ["Direct", "Social Media", "Email Campaign"],
            "created_at": "2024-01-01T00:00:00+00:00",
            "updated_at": now_iso,
        }
    ]

    attendees = [
        {
            "id": "attendee_1",
            "event_id": "evt_1",
            "user_id": "attendee_user_1",
            "ticket_type_id": "ticket_1",
            "registration_date": "2024-01-15T10:00:00+00:00",
            "check_in_status": "pending",
            "payment_status": "completed",
            "additional_info": {"full_name": "John Doe", "email": "attendee@example.com"},
        }
    ]

    campaigns = [
        {
            "id": "campaign_1",
            "event_id": "evt_1",
            "name": "Pre-Event Announcement",
            "channel": "email",
            "subject": "Don't miss our upcoming event!",
            "content": "Join us for an amazing event experience...",
            "audience": "all_subscribers",
            "status": "sent",
            "sent_at": (now - timedelta(days=7)).isoformat(),
            "open_rate": 24.5,
            "click_rate": 8.2,
            "created_at": (now - timedelta(days=10)).isoformat(),
        }
    ]

    return {
        EVENTS_KEY: events,
        TICKET_TYPES_KEY: ticket_types,
        ATTENDEES_KEY: attendees,
        ANALYTICS_KEY: analytics,
        CAMPAIGNS_KEY: campaigns,
    }
