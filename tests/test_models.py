"""Tests for the ORM mapping of users, chats and memberships."""

from sqlalchemy import inspect, select

from chatrooms.models.chat import Chat
from chatrooms.models.chat_member import ChatMember
from chatrooms.models.user import User
from chatrooms.services.membership import MembershipAuthority


class TestMapping:
    def test_membership_is_only_reachable_through_rows(self):
        for model in (User, Chat, ChatMember):
            assert list(inspect(model).relationships) == []

    def test_member_row_has_single_timestamp_pair(self):
        columns = set(ChatMember.__table__.columns.keys())

        assert columns == {"id", "chat_id", "user_id", "created_at", "updated_at"}

    def test_chat_is_versioned(self):
        assert inspect(Chat).version_id_col is Chat.__table__.c.version


class TestMemberRows:
    async def test_join_time_is_created_at(self, db, hasher, alice, bob):
        membership = MembershipAuthority(db, hasher)
        created = await membership.create_chat(alice, "secret")
        await membership.join_chat(bob, created.id, "secret")

        rows = (
            await db.execute(
                select(ChatMember).where(ChatMember.chat_id == created.id).order_by(ChatMember.id)
            )
        ).scalars().all()

        assert [row.user_id for row in rows] == [alice.id, bob.id]
        assert all(row.created_at is not None for row in rows)
        assert rows[0].created_at <= rows[1].created_at
