"""
Tests for symmetric follow/unfollow.

Concurrent writers are simulated by bumping a row's version counter between
the read and the write, which is exactly what a competing transaction does.
"""

import pytest
from sqlalchemy import text

from skillshare.exceptions import ConflictError, NotFoundError, SelfFollowError
from skillshare.models import User
from skillshare.repositories import UserRepository
from skillshare.services import SocialGraphMutator


@pytest.fixture
def graph(test_session) -> SocialGraphMutator:
    return SocialGraphMutator(UserRepository(test_session))


def _reload(session, user_id: str) -> User:
    return UserRepository(session).get_current(user_id)


def _bump_version(session, user_id: str) -> None:
    session.execute(
        text("UPDATE users SET version_id = version_id + 1 WHERE id = :id"),
        {"id": user_id},
    )


class TestFollow:
    def test_follow_updates_both_sides(self, graph, make_user, test_session):
        alice, bob = make_user(), make_user()

        result = graph.follow(alice.id, bob.id)

        assert result.changed is True
        assert result.counts.followers_count == 1
        assert result.counts.following_count == 0
        assert _reload(test_session, alice.id).following == [bob.id]
        assert _reload(test_session, bob.id).followers == [alice.id]

    def test_follow_is_idempotent(self, graph, make_user, test_session):
        alice, bob = make_user(), make_user()

        first = graph.follow(alice.id, bob.id)
        second = graph.follow(alice.id, bob.id)

        assert second.changed is False
        assert second.counts == first.counts
        assert _reload(test_session, alice.id).following == [bob.id]
        assert _reload(test_session, bob.id).followers == [alice.id]

    def test_counts_are_for_the_target(self, graph, make_user):
        alice, bob, carol = make_user(), make_user(), make_user()
        graph.follow(bob.id, carol.id)

        result = graph.follow(alice.id, bob.id)

        assert result.counts.followers_count == 1
        assert result.counts.following_count == 1

    def test_self_follow_rejected_without_writes(self, graph, make_user, test_session):
        alice = make_user()
        version = alice.version_id

        with pytest.raises(SelfFollowError):
            graph.follow(alice.id, alice.id)

        stored = _reload(test_session, alice.id)
        assert stored.following == []
        assert stored.followers == []
        assert stored.version_id == version

    def test_self_follow_checked_before_existence(self, graph):
        with pytest.raises(SelfFollowError):
            graph.follow("missing", "missing")

    def test_unknown_target(self, graph, make_user, test_session):
        alice = make_user()

        with pytest.raises(NotFoundError):
            graph.follow(alice.id, "missing")

        assert _reload(test_session, alice.id).following == []

    def test_unknown_follower(self, graph, make_user, test_session):
        bob = make_user()

        with pytest.raises(NotFoundError):
            graph.follow("missing", bob.id)

        assert _reload(test_session, bob.id).followers == []

    def test_follow_repairs_half_written_edge(self, graph, make_user, test_session):
        bob = make_user()
        # Follower side written, target side lost
        alice = make_user(following=[bob.id])

        result = graph.follow(alice.id, bob.id)

        assert result.changed is False
        assert result.counts.followers_count == 1
        assert _reload(test_session, bob.id).followers == [alice.id]

    def test_follow_on_user_created_without_lists(self, graph, make_user, test_session):
        alice = make_user()
        bob = User(email="bare@example.com", password_hash="x")
        test_session.add(bob)
        test_session.flush()
        assert bob.followers == []

        result = graph.follow(alice.id, bob.id)

        assert result.changed is True
        assert _reload(test_session, bob.id).followers == [alice.id]


class TestUnfollow:
    def test_unfollow_restores_prior_state(self, graph, make_user, test_session):
        alice, bob = make_user(), make_user()
        graph.follow(alice.id, bob.id)

        result = graph.unfollow(alice.id, bob.id)

        assert result.changed is True
        assert result.counts.followers_count == 0
        assert _reload(test_session, alice.id).following == []
        assert _reload(test_session, bob.id).followers == []

    def test_unfollow_when_not_following_is_a_no_op(self, graph, make_user):
        alice, bob = make_user(), make_user()

        result = graph.unfollow(alice.id, bob.id)

        assert result.changed is False
        assert result.counts.followers_count == 0

    def test_unfollow_keeps_other_edges(self, graph, make_user, test_session):
        alice, bob, carol = make_user(), make_user(), make_user()
        graph.follow(alice.id, bob.id)
        graph.follow(carol.id, bob.id)

        graph.unfollow(alice.id, bob.id)

        assert _reload(test_session, bob.id).followers == [carol.id]

    def test_unfollow_unknown_user(self, graph, make_user):
        alice = make_user()

        with pytest.raises(NotFoundError):
            graph.unfollow(alice.id, "missing")


class TestConcurrency:
    def test_retries_after_version_conflict(self, make_user, test_session, monkeypatch):
        alice, bob = make_user(), make_user()
        users = UserRepository(test_session)
        graph = SocialGraphMutator(users, max_attempts=3)

        original_save = users.save
        calls = {"n": 0}

        def racing_save(instance):
            calls["n"] += 1
            if calls["n"] == 1:
                _bump_version(test_session, instance.id)
            return original_save(instance)

        monkeypatch.setattr(users, "save", racing_save)

        result = graph.follow(alice.id, bob.id)

        assert result.changed is True
        assert calls["n"] == 3
        assert _reload(test_session, alice.id).following == [bob.id]
        assert _reload(test_session, bob.id).followers == [alice.id]

    def test_conflict_when_attempts_exhausted(self, make_user, test_session, monkeypatch):
        alice, bob = make_user(), make_user()
        users = UserRepository(test_session)
        graph = SocialGraphMutator(users, max_attempts=2)

        original_save = users.save

        def always_racing_save(instance):
            _bump_version(test_session, instance.id)
            return original_save(instance)

        monkeypatch.setattr(users, "save", always_racing_save)

        with pytest.raises(ConflictError):
            graph.follow(alice.id, bob.id)

        monkeypatch.undo()
        assert _reload(test_session, alice.id).following == []
        assert _reload(test_session, bob.id).followers == []

    def test_max_attempts_must_be_positive(self, test_session):
        with pytest.raises(ValueError):
            SocialGraphMutator(UserRepository(test_session), max_attempts=0)
