"""
Content ledger: gating, ordering, authorship and attachment atomicity.
"""
from datetime import datetime, timedelta

import pytest
import pytz

from roomshare.core.exceptions import AttachmentWriteFailed, ForbiddenError
from roomshare.utils.access_gate import AccessGate
from roomshare.utils.attachment_store import Attachment, LocalAttachmentStore
from roomshare.utils.content_ledger import ContentLedger, as_utc
from roomshare.utils.membership_manager import MembershipManager


class FailingAttachmentStore:
    def __init__(self):
        self.calls = 0

    def bind(self, data, suggested_name, content_type=None):
        self.calls += 1
        raise AttachmentWriteFailed("disk full")


class StepClock:
    """Returns the queued instants in order."""

    def __init__(self, *instants):
        self.instants = list(instants)

    def __call__(self):
        return self.instants.pop(0)


T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=pytz.utc)


@pytest.fixture
def memberships(db_session, make_room):
    make_room("R1")
    make_room("R2")
    mm = MembershipManager(db_session)
    mm.add_user("alice")
    mm.add_user("bob")
    mm.join_room("alice", "R1")
    return mm


def _ledger(db_session, memberships, attachments=None, clock=None):
    gate = AccessGate(verifier=None, memberships=memberships)
    kwargs = {"clock": clock} if clock else {}
    return ContentLedger(db_session, gate, attachments or FailingAttachmentStore(), **kwargs)


def test_write_requires_membership_and_succeeds_right_after_join(db_session, memberships):
    ledger = _ledger(db_session, memberships)
    with pytest.raises(ForbiddenError):
        ledger.write_post("bob", "R1", "hi")

    memberships.join_room("bob", "R1")
    post = ledger.write_post("bob", "R1", "hi")

    assert post.author == "bob"
    assert post.file_url is None


def test_reads_are_gated(db_session, memberships):
    ledger = _ledger(db_session, memberships)
    with pytest.raises(ForbiddenError):
        ledger.list_posts("bob", "R1")
    with pytest.raises(ForbiddenError):
        ledger.list_announcements("bob", "R1")


def test_posts_listed_in_reverse_insertion_order(db_session, memberships):
    clock = StepClock(*(T0 + timedelta(seconds=i) for i in range(4)))
    ledger = _ledger(db_session, memberships, clock=clock)
    for i in range(4):
        ledger.write_post("alice", "R1", f"post {i}")

    listed = ledger.list_posts("alice", "R1")

    assert [p.content for p in listed] == ["post 3", "post 2", "post 1", "post 0"]


def test_equal_or_earlier_clock_readings_still_advance(db_session, memberships):
    clock = StepClock(T0, T0, T0 - timedelta(minutes=5))
    ledger = _ledger(db_session, memberships, clock=clock)
    first = ledger.write_post("alice", "R1", "a")
    second = ledger.write_post("alice", "R1", "b")
    third = ledger.write_post("alice", "R1", "c")

    stamps = [as_utc(p.timestamp) for p in (first, second, third)]
    assert stamps[0] < stamps[1] < stamps[2]
    assert [p.content for p in ledger.list_posts("alice", "R1")] == ["c", "b", "a"]


def test_attachment_failure_records_nothing(db_session, memberships):
    store = FailingAttachmentStore()
    ledger = _ledger(db_session, memberships, attachments=store)
    attachment = Attachment(data=b"%PDF", filename="notes.pdf", content_type="application/pdf")

    with pytest.raises(AttachmentWriteFailed):
        ledger.write_post("alice", "R1", "with file", attachment)

    assert store.calls == 1
    assert ledger.list_posts("alice", "R1") == []


def test_non_member_upload_does_not_store_file(db_session, memberships):
    store = FailingAttachmentStore()
    ledger = _ledger(db_session, memberships, attachments=store)
    with pytest.raises(ForbiddenError):
        ledger.write_post("bob", "R1", "x", Attachment(data=b"1", filename="a.txt"))
    assert store.calls == 0


def test_post_with_attachment_carries_file_url(db_session, memberships, tmp_path):
    store = LocalAttachmentStore(tmp_path, "/uploads")
    ledger = _ledger(db_session, memberships, attachments=store)

    post = ledger.write_post("alice", "R1", "see file", Attachment(data=b"abc", filename="a.txt"))

    assert post.file_url.startswith("/uploads/")
    key = post.file_url.rsplit("/", 1)[1]
    assert (tmp_path / key).read_bytes() == b"abc"


def test_announcements_are_a_separate_ledger(db_session, memberships):
    clock = StepClock(T0, T0 + timedelta(seconds=1), T0 + timedelta(seconds=2))
    ledger = _ledger(db_session, memberships, clock=clock)
    ledger.write_announcement("alice", "R1", "Exam", "Friday")
    ledger.write_post("alice", "R1", "hello")
    ledger.write_announcement("alice", "R1", "Homework", "Page 3")

    announcements = ledger.list_announcements("alice", "R1")

    assert [a.title for a in announcements] == ["Homework", "Exam"]
    assert all(a.author == "alice" for a in announcements)
    assert [p.content for p in ledger.list_posts("alice", "R1")] == ["hello"]


def test_rooms_do_not_share_entries(db_session, memberships):
    memberships.join_room("alice", "R2")
    ledger = _ledger(db_session, memberships)
    ledger.write_post("alice", "R1", "one")
    ledger.write_post("alice", "R2", "two")
    assert [p.content for p in ledger.list_posts("alice", "R2")] == ["two"]
