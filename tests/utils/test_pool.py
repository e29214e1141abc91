from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from pugview.utils.pool import BufferPool


def test_buffers_are_reused_and_cleared() -> None:
    pool = BufferPool()

    with pool.buffer() as buf:
        buf.write("first render")
        first = buf

    assert len(pool) == 1
    with pool.buffer() as buf:
        assert buf is first
        assert buf.getvalue() == ""


def test_buffer_returned_on_error() -> None:
    pool = BufferPool()

    try:
        with pool.buffer() as buf:
            buf.write("partial")
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert len(pool) == 1
    assert pool.acquire().getvalue() == ""


def test_idle_buffers_are_bounded() -> None:
    pool = BufferPool(max_size=2)
    bufs = [pool.acquire() for _ in range(5)]

    for buf in bufs:
        pool.release(buf)

    assert len(pool) == 2


def test_concurrent_borrowers_get_distinct_buffers() -> None:
    pool = BufferPool()

    def work(i: int) -> str:
        with pool.buffer() as buf:
            buf.write(f"<{i}>")
            buf.write(f"</{i}>")
            return buf.getvalue()

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(work, range(200)))

    assert results == [f"<{i}></{i}>" for i in range(200)]
    assert len(pool) <= 8
