import asyncio

import pytest

from conftest import FailingChannel, RecordingChannel
from officehours.services.delivery import DisabledChannel, mask_contact, to_whatsapp_address
from officehours.services.notifications import NotificationDispatcher
from officehours.services.queue_engine import QueueEngine


class SlowChannel:
    enabled = True

    def __init__(self):
        self.release = asyncio.Event()
        self.sent = []

    async def send(self, destination: str, body: str) -> None:
        await self.release.wait()
        self.sent.append(destination)


def make_queue(hasher, dispatcher) -> QueueEngine:
    queue = QueueEngine(hasher, room_code="TEST")
    queue.add_listener(dispatcher)
    return queue


async def test_serve_notifies_new_front(hasher):
    channel = RecordingChannel()
    dispatcher = NotificationDispatcher(channel, loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    queue.admit("+15550000001", notify_consent=True)
    second = queue.admit("+15550000002", notify_consent=True).entrant

    queue.pop_front()
    assert channel.sent == []  # scheduled, not yet run

    await dispatcher.drain()
    assert len(channel.sent) == 1
    destination, body = channel.sent[0]
    assert destination == "+15550000002"
    assert second.display_name in body
    assert "next in line" in body


async def test_removing_front_notifies_new_front(hasher):
    channel = RecordingChannel()
    dispatcher = NotificationDispatcher(channel, loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    first = queue.admit("+15550000001", notify_consent=True).entrant
    queue.admit("+15550000002", notify_consent=True)

    queue.remove(first.id)
    await dispatcher.drain()

    assert [d for d, _ in channel.sent] == ["+15550000002"]


async def test_removing_non_front_does_not_notify(hasher):
    channel = RecordingChannel()
    dispatcher = NotificationDispatcher(channel, loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    queue.admit("+15550000001", notify_consent=True)
    second = queue.admit("+15550000002", notify_consent=True).entrant
    queue.admit("+15550000003", notify_consent=True)

    queue.remove(second.id)
    await dispatcher.drain()

    assert channel.sent == []


async def test_no_notification_without_consent(hasher):
    channel = RecordingChannel()
    dispatcher = NotificationDispatcher(channel, loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    queue.admit("+15550000001", notify_consent=True)
    queue.admit("+15550000002", notify_consent=False)

    queue.pop_front()
    await dispatcher.drain()

    assert channel.sent == []


async def test_no_notification_when_queue_empties(hasher):
    channel = RecordingChannel()
    dispatcher = NotificationDispatcher(channel, loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    queue.admit("+15550000001", notify_consent=True)

    queue.pop_front()
    await dispatcher.drain()

    assert channel.sent == []


@pytest.mark.parametrize(
    "notify_on_serve,notify_on_remove,expected",
    [
        (True, True, ["+15550000002", "+15550000003"]),
        (True, False, ["+15550000002"]),
        (False, True, ["+15550000003"]),
        (False, False, []),
    ],
)
async def test_triggers_switch_independently(hasher, notify_on_serve, notify_on_remove, expected):
    channel = RecordingChannel()
    dispatcher = NotificationDispatcher(
        channel,
        loop=asyncio.get_running_loop(),
        notify_on_serve=notify_on_serve,
        notify_on_remove=notify_on_remove,
    )
    queue = make_queue(hasher, dispatcher)
    for i in range(1, 4):
        queue.admit(f"+1555000000{i}", notify_consent=True)

    queue.pop_front()  # serve -> +...2 at front
    queue.remove(queue.peek_front().entrant.id)  # remove front -> +...3 at front
    await dispatcher.drain()

    assert [d for d, _ in channel.sent] == expected


async def test_delivery_failure_does_not_affect_queue(hasher):
    channel = FailingChannel()
    dispatcher = NotificationDispatcher(channel, loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    first = queue.admit("+15550000001", notify_consent=True).entrant
    queue.admit("+15550000002", notify_consent=True)

    served = queue.pop_front()
    await dispatcher.drain()

    assert served.entrant.id == first.id
    assert len(queue) == 1
    assert channel.attempts == 1  # no retry
    assert dispatcher.pending_count == 0


async def test_slow_delivery_does_not_block_mutation(hasher):
    channel = SlowChannel()
    dispatcher = NotificationDispatcher(channel, loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    queue.admit("+15550000001", notify_consent=True)
    queue.admit("+15550000002", notify_consent=True)

    assert queue.pop_front() is not None
    await asyncio.sleep(0)
    assert dispatcher.pending_count == 1
    assert channel.sent == []

    channel.release.set()
    await dispatcher.drain()
    assert channel.sent == ["+15550000002"]


async def test_dispatch_from_worker_thread(hasher):
    channel = RecordingChannel()
    dispatcher = NotificationDispatcher(channel, loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    queue.admit("+15550000001", notify_consent=True)
    queue.admit("+15550000002", notify_consent=True)

    await asyncio.to_thread(queue.pop_front)
    await dispatcher.drain()

    assert [d for d, _ in channel.sent] == ["+15550000002"]


async def test_disabled_channel_skips(hasher):
    dispatcher = NotificationDispatcher(DisabledChannel(), loop=asyncio.get_running_loop())
    queue = make_queue(hasher, dispatcher)
    queue.admit("+15550000001", notify_consent=True)
    queue.admit("+15550000002", notify_consent=True)

    queue.pop_front()
    assert dispatcher.pending_count == 0


def test_unbound_dispatcher_drops_without_raising(hasher):
    channel = RecordingChannel()
    dispatcher = NotificationDispatcher(channel)
    queue = make_queue(hasher, dispatcher)
    queue.admit("+15550000001", notify_consent=True)
    queue.admit("+15550000002", notify_consent=True)

    assert queue.pop_front() is not None
    assert dispatcher.pending_count == 0


def test_mask_contact():
    assert mask_contact("+15551230000") == "+155****0000"
    assert mask_contact("whatsapp:+15551230000") == "+155****0000"
    assert mask_contact("123") == "****"


def test_whatsapp_address():
    assert to_whatsapp_address("+15551230000") == "whatsapp:+15551230000"
    assert to_whatsapp_address("whatsapp:+15551230000") == "whatsapp:+15551230000"
