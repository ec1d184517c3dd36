"""Checks an attendee's RSVP against the guest policy of the event.

Every rule is independent; the first one that fails raises
:class:`RSVPPolicyViolation` with a message meant for the attendee.
"""

from dataclasses import dataclass

from src.guests.dtos import GuestResponse, GuestStatus, RSVPPolicyViolation


@dataclass(frozen=True)
class EventPolicy:
    allow_plus_ones: bool = False
    max_plus_ones: int | None = None
    allow_maybe_rsvp: bool = True
    allow_family_headcount: bool = False
    limit_event_capacity: bool = False
    max_event_capacity: int | None = None


@dataclass(frozen=True)
class RSVPUpdate:
    """The values a guest record would hold once the RSVP is applied."""

    status: GuestStatus
    response: GuestResponse | None = None
    plus_ones: int = 0
    adults: int = 0
    children: int = 0


def party_size(update: RSVPUpdate, policy: EventPolicy) -> int:
    """Number of seats an RSVP takes, the guest included."""
    if policy.allow_family_headcount and (update.adults or update.children):
        seats = update.adults + update.children
    else:
        seats = 1
    return seats + update.plus_ones


def validate_rsvp_update(
    update: RSVPUpdate,
    policy: EventPolicy,
    confirmed_headcount: int = 0,
) -> None:
    """
    Raise RSVPPolicyViolation when ``update`` breaks a rule of ``policy``.
    ``confirmed_headcount`` is the seats already taken by the other confirmed guests.
    """
    if update.plus_ones < 0 or update.adults < 0 or update.children < 0:
        raise RSVPPolicyViolation("Guest counts cannot be negative")

    if update.plus_ones > 0 and not policy.allow_plus_ones:
        raise RSVPPolicyViolation("Plus-ones are not allowed for this event")

    if policy.max_plus_ones is not None and update.plus_ones > policy.max_plus_ones:
        raise RSVPPolicyViolation(f"A maximum of {policy.max_plus_ones} plus-ones is allowed for this event")

    if update.response == GuestResponse.MAYBE and not policy.allow_maybe_rsvp:
        raise RSVPPolicyViolation("A 'maybe' response is not allowed for this event")

    if (update.adults > 0 or update.children > 0) and not policy.allow_family_headcount:
        raise RSVPPolicyViolation("Family headcount is not enabled for this event")

    if (
        update.status == GuestStatus.CONFIRMED
        and policy.limit_event_capacity
        and policy.max_event_capacity is not None
    ):
        requested = party_size(update, policy)
        if confirmed_headcount + requested > policy.max_event_capacity:
            remaining = max(policy.max_event_capacity - confirmed_headcount, 0)
            raise RSVPPolicyViolation(
                f"This event is at capacity. Only {remaining} spot(s) remaining"
            )
