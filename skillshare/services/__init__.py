"""
Core services for the identity and social-graph layer.

Usage:
    from skillshare.services import AuthenticationService, SocialGraphMutator

    with db.session() as session:
        users = UserRepository(session)
        graph = SocialGraphMutator(users)
        graph.follow(alice_id, bob_id)
"""

from .auth_service import AuthenticationService, AuthResult, ProfileView
from .notifications import EmitOutcome, NotificationEmitter, WriteResult
from .social_graph import FollowCounts, FollowResult, SocialGraphMutator

__all__ = [
    "AuthenticationService",
    "AuthResult",
    "ProfileView",
    "EmitOutcome",
    "NotificationEmitter",
    "WriteResult",
    "FollowCounts",
    "FollowResult",
    "SocialGraphMutator",
]
