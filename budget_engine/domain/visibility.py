"""Which records a user sees and takes part in"""

from typing import AbstractSet


def participates(owner_id: str, is_shared: bool, user_id: str, collaborators: AbstractSet[str]) -> bool:
    """True when a record is the user's own or shared by an accepted collaborator"""
    return owner_id == user_id or (is_shared and owner_id in collaborators)
