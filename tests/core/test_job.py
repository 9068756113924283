"""Tests for the Job class."""

import pytest

from jobpool.core.job import Job


def add(a, b, scale=1):
    return (a + b) * scale


def test_run_calls_function_with_arguments():
    job = Job(add, (1, 2), {"scale": 10})

    assert job.run() == 30


def test_arguments_are_normalized():
    """Lists become tuples and a missing kwargs mapping becomes a dict."""
    job = Job(add, [1, 2], None)

    assert job.args == (1, 2)
    assert job.kwargs == {}


def test_defaults():
    job = Job(print)

    assert job.args == ()
    assert job.kwargs == {}
    assert job.id == 0


def test_non_callable_is_rejected():
    with pytest.raises(TypeError, match="callable"):
        Job("not a function")


def test_jobs_compare_by_identity():
    first = Job(add, (1, 2))
    second = Job(add, (1, 2))

    assert first != second
    assert first == first
    assert len({first, second}) == 2


def test_job_is_immutable():
    job = Job(add, (1, 2))

    with pytest.raises(AttributeError):
        job.args = (3, 4)


def test_name_uses_qualified_name():
    class Greeter:
        def greet(self):
            return "hi"

    assert Job(add).name == "add"
    assert Job(Greeter().greet).name.endswith("Greeter.greet")


def test_name_falls_back_to_repr():
    class CallableObject:
        def __call__(self):
            pass

        def __repr__(self):
            return "<callable object>"

    assert Job(CallableObject()).name == "<callable object>"


def test_name_survives_a_broken_repr():
    class UnprintableCallable:
        def __call__(self):
            pass

        def __repr__(self):
            raise RuntimeError("repr failed")

    assert Job(UnprintableCallable()).name == "<UnprintableCallable object>"


def test_repr_mentions_id_and_arguments():
    job = Job(add, (1, 2), id=7)

    assert repr(job) == "Job(id=7, func=add, args=(1, 2), kwargs={})"
