"""
Utility functions
"""
import re
import uuid


def new_session_id() -> str:
    """
    Generate a session id

    Example:
        >>> len(new_session_id())
        12
    """
    return uuid.uuid4().hex[:12]


def new_player_id(name: str) -> str:
    """
    Generate a player id that carries a readable slug of the player name

    Example:
        >>> new_player_id("Ada Lovelace").startswith("player-ada-lovelace-")
        True
        >>> new_player_id("AC/DC").startswith("player-ac-dc-")
        True
    """
    slug = re.sub(r'[^a-z0-9]+', '-', name.strip().lower()).strip('-')[:20].strip('-')
    unique_suffix = uuid.uuid4().hex[:8]
    return f"player-{slug}-{unique_suffix}" if slug else f"player-{unique_suffix}"
