"""OAuth ``state`` parameter handling.

The state value carries the initiating user id across the Shopify redirect.
It is the bare user id string, or ``anon`` when no user id was supplied.
Nothing signs it, so a recovered user id is a routing hint, not proof of
identity.
"""

ANONYMOUS = "anon"


def encode_state(user_id: str | None) -> str:
    """Build the state value for an authorization redirect."""
    if user_id is None:
        return ANONYMOUS
    user_id = user_id.strip()
    return user_id or ANONYMOUS


def decode_state(state: str | None) -> str | None:
    """Recover the user id from a callback state value.

    Returns None for a missing state or the anonymous sentinel.
    """
    if not state:
        return None
    user_id = state.strip()
    if not user_id or user_id == ANONYMOUS:
        return None
    return user_id
