"""
Profiles, friendships, user search and roles.

Friends can see each other's cellars and ratings; row-level security on the
database enforces this, and the client checks the friendship before asking.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError
from supabase import Client

from cellarbook import cellar_repo, ratings_repo, social_repo
from cellarbook.constants import AppRole, FriendshipStatus
from cellarbook.error_handling import FormValidationError, backend_call
from cellarbook.schema import CellarItem, Friendship, Profile, ProfileUpsert, Rating
from cellarbook.utils import blank_to_none

logger = logging.getLogger(__name__)


@dataclass
class FriendshipLists:
    friends: List[Friendship] = field(default_factory=list)
    incoming: List[Friendship] = field(default_factory=list)
    outgoing: List[Friendship] = field(default_factory=list)

    def is_friend(self, user_id: str) -> bool:
        return any(user_id in (f.requester_id, f.addressee_id) for f in self.friends)


@dataclass(frozen=True)
class UserRoles:
    roles: frozenset = frozenset()

    @property
    def is_owner(self) -> bool:
        return AppRole.OWNER in self.roles

    @property
    def is_admin(self) -> bool:
        return AppRole.ADMIN in self.roles

    @property
    def is_admin_or_owner(self) -> bool:
        return self.is_owner or self.is_admin


class SocialService:
    def __init__(self, sb: Client, user_id: str):
        self.sb = sb
        self.user_id = user_id

    # Profiles

    def load_profile(self) -> Profile:
        with backend_call("load profile"):
            row = social_repo.repo_get_profile(self.sb, self.user_id)
        return Profile.model_validate(row) if row else Profile(user_id=self.user_id)

    def save_profile(self, username: str = "", display_name: str = "", bio: str = "",
                     location: str = "", avatar_url: Optional[str] = None,
                     birth_year: Optional[int] = None, email: Optional[str] = None) -> Profile:
        """Upsert the user's profile; a blank username falls back to the account email."""
        username = (username or "").strip() or (email or "").strip()
        try:
            payload = ProfileUpsert(
                user_id=self.user_id,
                username=username,
                display_name=blank_to_none(display_name),
                bio=blank_to_none(bio),
                location=blank_to_none(location),
                avatar_url=avatar_url,
                birth_year=birth_year,
            )
        except ValidationError as e:
            fields = [str(err["loc"][0]) for err in e.errors() if err.get("loc")]
            raise FormValidationError("Invalid profile details", fields=fields) from e

        with backend_call("update profile"):
            row = social_repo.repo_upsert_profile(self.sb, payload)
        logger.info(f"Profile saved for {self.user_id}")
        return Profile.model_validate(row or payload.to_row())

    # Friendships

    def load_friendships(self) -> FriendshipLists:
        """Accepted friends plus pending requests in both directions, with profiles."""
        with backend_call("load friends"):
            rows = social_repo.repo_list_friendships(self.sb, self.user_id)
            friendships = [Friendship.model_validate(r) for r in rows]
            other_ids = sorted({f.other_party(self.user_id) for f in friendships})
            profiles = {
                p["user_id"]: Profile.model_validate(p)
                for p in social_repo.repo_profiles_by_ids(self.sb, other_ids)
            }

        lists = FriendshipLists()
        for friendship in friendships:
            other_id = friendship.other_party(self.user_id)
            friendship = friendship.model_copy(
                update={"profile": profiles.get(other_id, Profile(user_id=other_id))}
            )
            if friendship.status is FriendshipStatus.ACCEPTED:
                lists.friends.append(friendship)
            elif friendship.status is FriendshipStatus.PENDING:
                if friendship.addressee_id == self.user_id:
                    lists.incoming.append(friendship)
                else:
                    lists.outgoing.append(friendship)
        return lists

    def send_friend_request(self, addressee_id: str) -> None:
        if not addressee_id or addressee_id == self.user_id:
            raise FormValidationError("Choose another user to befriend", fields=["addressee_id"])
        with backend_call("send friend request"):
            social_repo.repo_insert_friendship(self.sb, self.user_id, addressee_id)
        logger.info(f"Friend request sent to {addressee_id}")

    def respond(self, request_id: str, accept: bool) -> None:
        status = FriendshipStatus.ACCEPTED if accept else FriendshipStatus.REJECTED
        with backend_call("respond to friend request"):
            social_repo.repo_update_friendship_status(self.sb, request_id, status)

    def remove_friend(self, friendship_id: str) -> None:
        with backend_call("remove friend"):
            social_repo.repo_delete_friendship(self.sb, friendship_id)

    def search_users(self, term: str) -> List[Profile]:
        if not (term or "").strip():
            return []
        with backend_call("search users"):
            rows = social_repo.repo_search_profiles(self.sb, term.strip(), self.user_id)
        return [Profile.model_validate(r) for r in rows]

    def friend_cellar(self, friend_id: str, friendships: FriendshipLists) -> List[CellarItem]:
        """A friend's cellar; refused without a query unless the friendship is accepted."""
        if friend_id == self.user_id or not friendships.is_friend(friend_id):
            raise FormValidationError("You can only view the cellars of friends", fields=["friend_id"])
        with backend_call("load friend's cellar"):
            rows = cellar_repo.repo_list_cellar(self.sb, friend_id)
        return [CellarItem.from_record(r) for r in rows]

    def friend_ratings(self) -> List[Rating]:
        with backend_call("load friends' ratings"):
            rows = ratings_repo.repo_list_friend_ratings(self.sb, self.user_id)
        return [Rating.from_record(r) for r in rows]

    # Roles

    def load_roles(self) -> UserRoles:
        with backend_call("load roles"):
            roles = social_repo.repo_list_roles(self.sb, self.user_id)
        return UserRoles(frozenset(AppRole(r) for r in roles if r in {role.value for role in AppRole}))
