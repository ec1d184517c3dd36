GUESTS_URL = "/api/events/guests"
GUEST_URL = "/api/events/guests/{guest_id}"
ATTENDEE_GUESTS_URL = "/api/attendee/guests"
ATTENDEE_EVENTS_URL = "/api/attendee/events"
PUBLIC_GUEST_URL = "/api/public/guests/{guest_id}"
