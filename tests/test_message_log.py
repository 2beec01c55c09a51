import asyncio

import pytest

from chatkeeper.models import format_log_record
from chatkeeper.services.message_log import MessageLogSink
from chatkeeper.testing.fakes import make_event


def test_record_format():
    event = make_event("hello there", author="bob")
    assert format_log_record(event) == "[2024-01-01T00:00:00+00:00] bob: hello there\n"


@pytest.mark.asyncio
async def test_append_creates_and_appends(log_path):
    sink = MessageLogSink(log_path)
    sink.open()
    await sink.append(make_event("one"))
    await sink.close()

    # Reopening appends rather than truncating.
    sink = MessageLogSink(log_path)
    sink.open()
    await sink.append(make_event("two"))
    await sink.close()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert [line.split(": ", 1)[1] for line in lines] == ["one", "two"]


@pytest.mark.asyncio
async def test_concurrent_appends_never_interleave(log_path):
    sink = MessageLogSink(log_path)
    sink.open()
    payloads = [f"message-{i}-" + ("x" * 500) for i in range(50)]
    await asyncio.gather(*(sink.append(make_event(p, author=f"user{i}")) for i, p in enumerate(payloads)))
    await sink.close()

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 50
    assert sorted(line.split(": ", 1)[1] for line in lines) == sorted(payloads)


@pytest.mark.asyncio
async def test_append_before_open_raises(log_path):
    sink = MessageLogSink(log_path)
    with pytest.raises(RuntimeError):
        await sink.append(make_event("x"))


@pytest.mark.asyncio
async def test_close_is_idempotent(log_path):
    sink = MessageLogSink(log_path)
    sink.open()
    await sink.close()
    await sink.close()
    assert not sink.is_open


@pytest.mark.asyncio
async def test_append_after_close_raises(log_path):
    sink = MessageLogSink(log_path)
    sink.open()
    await sink.append(make_event("before"))
    await sink.close()
    with pytest.raises(RuntimeError, match="not open"):
        await sink.append(make_event("after"))
    assert log_path.read_text(encoding="utf-8").count("\n") == 1


@pytest.mark.asyncio
async def test_close_racing_pending_appends(log_path):
    sink = MessageLogSink(log_path)
    sink.open()
    results = await asyncio.gather(
        sink.append(make_event("first")),
        sink.close(),
        sink.append(make_event("late")),
        return_exceptions=True,
    )
    assert results[0] is None
    assert isinstance(results[2], RuntimeError)
    assert log_path.read_text(encoding="utf-8").splitlines()[0].endswith("first")
