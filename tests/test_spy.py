import pytest

from memocall import Call, spy


def test_records_calls():
    @spy
    def work(a, b):
        return a + b

    assert work(1, 2) == 3
    assert work(4, 5) == 9
    assert [call.args for call in work.calls] == [(1, 2), (4, 5)]
    assert work.calls[0] == Call((1, 2), {})


def test_records_failed_calls():
    @spy
    def fail(x):
        raise KeyError(x)

    with pytest.raises(KeyError):
        fail("missing")
    assert work_args(fail) == [("missing",)]


def test_keyword_only_arguments():
    @spy
    def fetch(url, *, timeout):
        return timeout

    assert fetch("/a", timeout=3) == 3
    assert fetch.calls == [Call(("/a",), {"timeout": 3})]


def test_keeps_signature():
    def greet(name, greeting="hi"):
        """Greet someone."""
        return "{} {}".format(greeting, name)

    wrapped = spy(greet)
    assert wrapped.__name__ == "greet"
    assert wrapped.__doc__ == "Greet someone."
    with pytest.raises(TypeError):
        wrapped()
    assert wrapped.calls == []


def test_method_context_is_forwarded():
    class Counter:
        def __init__(self):
            self.total = 0

        @spy
        def add(self, n):
            self.total += n
            return self.total

    counter = Counter()
    counter.add(2)
    assert counter.add(3) == 5
    assert [call.args[1:] for call in Counter.add.calls] == [(2,), (3,)]
    assert Counter.add.calls[0].args[0] is counter


def work_args(wrapper):
    return [call.args for call in wrapper.calls]
