"""
Многопоточные тесты освобождения дескриптора и блокировки читатели/писатель.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from chinese_tokenizer.concurrency import ReadWriteLock
from chinese_tokenizer.exceptions import UseAfterFreeError
from chinese_tokenizer.jieba import Jieba

pytestmark = pytest.mark.concurrency


@pytest.mark.parametrize("callers", [2, 8, 32])
def test_concurrent_free_releases_once(dict_files, fake_engine, callers):
    handle = Jieba(*dict_files, engine=fake_engine)
    barrier = threading.Barrier(callers)

    def free():
        barrier.wait()
        handle.free()

    threads = [threading.Thread(target=free) for _ in range(callers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert fake_engine.releases == 1
    assert handle.is_freed


def test_use_after_free_from_many_threads(dict_files, fake_engine):
    handle = Jieba(*dict_files, engine=fake_engine)
    handle.free()

    def attempt(_):
        try:
            handle.cut("北京")
        except UseAfterFreeError:
            return True
        return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(100)))

    assert all(results)
    assert fake_engine.arrays_allocated == 0


def test_concurrent_queries_on_one_handle(jieba, fake_engine, sample_texts):
    text = sample_texts["keywords"]
    expected = jieba.cut(text)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: jieba.cut(text), range(200)))

    assert all(r == expected for r in results)
    assert fake_engine.outstanding_arrays == 0


class TestReadWriteLock:

    def test_readers_share(self):
        lock = ReadWriteLock()
        inside = []
        barrier = threading.Barrier(4)

        def reader():
            with lock.reading():
                inside.append(1)
                # Все четыре читателя должны оказаться внутри одновременно
                barrier.wait(timeout=2)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(inside) == 4

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []
        writer_in = threading.Event()

        def writer():
            with lock.writing():
                writer_in.set()
                time.sleep(0.05)
                events.append("writer-done")

        def reader():
            writer_in.wait()
            with lock.reading():
                events.append("reader")

        w = threading.Thread(target=writer)
        r = threading.Thread(target=reader)
        w.start()
        r.start()
        w.join()
        r.join()
        assert events == ["writer-done", "reader"]

    def test_writer_waits_for_reader(self):
        lock = ReadWriteLock()
        events = []
        reader_in = threading.Event()

        def reader():
            with lock.reading():
                reader_in.set()
                time.sleep(0.05)
                events.append("reader-done")

        def writer():
            reader_in.wait()
            with lock.writing():
                events.append("writer")

        r = threading.Thread(target=reader)
        w = threading.Thread(target=writer)
        r.start()
        w.start()
        r.join()
        w.join()
        assert events == ["reader-done", "writer"]
