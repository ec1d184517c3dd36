EVENTS_URL = "/api/events"
CREATE_EVENT_URL = "/api/events/create-event"
UPDATE_EVENT_URL = "/api/events/update-event"
EVENT_URL = "/api/events/{event_id}"
EVENT_FEATURES_URL = "/api/events/{event_id}/features"
SEND_INVITATIONS_URL = "/api/events/{event_id}/send-invitations"
