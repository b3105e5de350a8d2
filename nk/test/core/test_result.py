"""Tests for nk.core.result module."""

from nk.core.result import Err, Ok, Result


class TestOk:
    def test_map(self) -> None:
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_repr(self) -> None:
        assert repr(Ok("v")) == "Ok('v')"


class TestErr:
    def test_map_is_noop(self) -> None:
        err: Result[int, str] = Err("boom")
        assert err.map(lambda x: x * 2) == Err("boom")

    def test_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


def test_pattern_matching() -> None:
    def describe(r: Result[int, str]) -> str:
        match r:
            case Ok(value):
                return f"ok {value}"
            case Err(error):
                return f"err {error}"

    assert describe(Ok(3)) == "ok 3"
    assert describe(Err("bad")) == "err bad"
