import threading

import chex

from evendist.entropy import KeyStream, resolve_key, seed_thread_stream, thread_stream


def test_key_stream() -> None:
    a, b = KeyStream(3), KeyStream(3)
    keys_a = [a.next_key() for _ in range(5)]
    keys_b = [b.next_key() for _ in range(5)]
    chex.assert_trees_all_equal(keys_a, keys_b)
    assert a.n_drawn == 5
    assert len({tuple(k.tolist()) for k in keys_a}) == 5


def test_resolve_key() -> None:
    stream = seed_thread_stream(1)
    key = stream.next_key()
    assert resolve_key(key) is key
    assert stream.n_drawn == 1
    resolve_key(None)
    assert stream.n_drawn == 2


def test_streams_are_per_thread() -> None:
    main = thread_stream()
    streams = {}

    def draw(name: str) -> None:
        streams[name] = thread_stream()

    threads = [threading.Thread(target=draw, args=(f"t{i}",)) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert streams["t0"] is not streams["t1"]
    assert main is not streams["t0"] and main is not streams["t1"]


def test_shared_stream_across_threads() -> None:
    stream = KeyStream(5)
    keys = []
    lock = threading.Lock()

    def draw() -> None:
        for _ in range(20):
            key = stream.next_key()
            with lock:
                keys.append(tuple(key.tolist()))

    threads = [threading.Thread(target=draw) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert stream.n_drawn == 80
    assert len(set(keys)) == 80
